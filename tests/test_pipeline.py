import numpy as np
import pytest
from PIL import Image

from vss_image import VSSConfig, share_image_file, share_raster
from vss_image.common.raster import black_mask, is_binary
from vss_image.preprocess import raster_from_image
from vss_image.scheme import block_black_counts


def _make_gradient_image(size=(40, 20)) -> Image.Image:
    w, h = size
    row = np.linspace(0, 255, w, dtype=np.uint8)
    arr = np.tile(row, (h, 1))
    return Image.fromarray(arr).convert("RGB")


def test_share_image_file_writes_every_stage(tmp_path):
    src_path = tmp_path / "gradient.png"
    _make_gradient_image().save(src_path)
    config = VSSConfig(max_width=16, max_height=16)

    result = share_image_file(src_path, tmp_path / "out", config, rng=5)

    assert result.shrunk.size == (10, 5)
    assert result.binary.size == (10, 5)
    assert is_binary(result.binary)
    assert result.shares.size == (20, 10)
    assert set(result.paths) == {"shrunk", "binary", "share_a", "share_b", "overlay"}
    for path in result.paths.values():
        assert path.exists()

    counts = block_black_counts(result.stacked)
    black = black_mask(result.binary)
    assert np.all(counts[black] == 4)
    assert np.all(counts[~black] == 2)


def test_gradient_splits_into_black_and_white():
    result = share_raster(raster_from_image(_make_gradient_image()), VSSConfig(), rng=0)
    black = black_mask(result.binary)
    assert black[:, 0].all()
    assert not black[:, -1].any()


def test_parallel_config_is_reproducible():
    src = raster_from_image(_make_gradient_image((64, 48)))
    config = VSSConfig(workers=3)
    a = share_raster(src, config, rng=9)
    b = share_raster(src, config, rng=9)
    assert np.array_equal(a.shares.first.data, b.shares.first.data)


def test_parallel_config_with_generator_falls_back_to_serial():
    src = raster_from_image(_make_gradient_image((8, 8)))
    result = share_raster(src, VSSConfig(workers=2), rng=np.random.default_rng(1))
    assert result.shares.size == (16, 16)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        share_image_file(tmp_path / "nope.png", tmp_path / "out")
