import pytest

from vss_image import VSSConfig


def test_defaults():
    cfg = VSSConfig()
    assert cfg.threshold == 128
    assert (cfg.max_width, cfg.max_height) == (300, 300)
    assert cfg.transparent_white is False
    assert cfg.workers == 1


def test_from_env_overrides():
    cfg = VSSConfig.from_env(
        {
            "VSS_THRESHOLD": "100.5",
            "VSS_MAX_WIDTH": "64",
            "VSS_MAX_HEIGHT": "32",
            "VSS_TRANSPARENT": "yes",
            "VSS_WORKERS": "2",
            "UNRELATED": "x",
        }
    )
    assert cfg.threshold == 100.5
    assert (cfg.max_width, cfg.max_height) == (64, 32)
    assert cfg.transparent_white is True
    assert cfg.workers == 2


def test_from_env_rejects_bad_values():
    with pytest.raises(ValueError):
        VSSConfig.from_env({"VSS_TRANSPARENT": "maybe"})
    with pytest.raises(ValueError):
        VSSConfig.from_env({"VSS_MAX_WIDTH": "0"})


def test_with_overrides_ignores_none():
    cfg = VSSConfig().with_overrides(threshold=None, transparent_white=True)
    assert cfg.threshold == 128
    assert cfg.transparent_white is True
    with pytest.raises(ValueError):
        VSSConfig().with_overrides(workers=0)


def test_binary_check_is_not_a_pipeline_setting():
    assert not hasattr(VSSConfig(), "strict")
    with pytest.raises(TypeError):
        VSSConfig(strict=True)
