import numpy as np
import pytest

from vss_image import (
    BLACK_PAIRS,
    PATTERNS,
    DimensionOverflowError,
    InvalidInputError,
    Raster,
    RandomSourceExhaustedError,
    SequenceRandomSource,
    encode,
    overlay,
)
from vss_image.analysis import pattern_indices
from vss_image.common.raster import black_mask
from vss_image.scheme import block_black_counts


def _make_binary(size=(16, 12), seed: int = 7) -> Raster:
    rng = np.random.default_rng(seed)
    return Raster.from_mask(rng.integers(0, 2, size=size).astype(bool))


def _block(share: Raster, x: int, y: int) -> list:
    """Row-major black bits of the 2x2 block for source pixel (x, y)."""
    return black_mask(share)[2 * y : 2 * y + 2, 2 * x : 2 * x + 2].reshape(-1).astype(int).tolist()


def test_single_black_pixel_every_pair_stacks_to_black():
    src = Raster.from_mask([[True]])
    for r, (i, j) in enumerate(BLACK_PAIRS):
        shares = encode(src, SequenceRandomSource([r]))
        assert shares.size == (2, 2)
        assert _block(shares.first, 0, 0) == list(PATTERNS[i])
        assert _block(shares.second, 0, 0) == list(PATTERNS[j])
        assert black_mask(overlay(*shares)).all()


def test_single_white_pixel_gets_same_pattern_in_both_shares():
    src = Raster.from_mask([[False]])
    for r, pattern in enumerate(PATTERNS):
        shares = encode(src, SequenceRandomSource([r]))
        assert np.array_equal(shares.first.data, shares.second.data)
        assert _block(shares.first, 0, 0) == list(pattern)
        assert int(black_mask(shares.first).sum()) == 2


def test_black_then_white_row():
    src = Raster.from_mask([[True, False]])
    shares = encode(src, SequenceRandomSource([0, 3]))
    assert shares.size == (4, 2)

    counts = block_black_counts(overlay(*shares))
    assert counts.tolist() == [[4, 2]]
    assert _block(shares.first, 1, 0) == _block(shares.second, 1, 0) == list(PATTERNS[3])
    assert _block(shares.first, 0, 0) == list(PATTERNS[0])
    assert _block(shares.second, 0, 0) == list(PATTERNS[1])


def test_shares_are_double_size_and_stack_correctly():
    src = _make_binary(size=(9, 13))
    shares = encode(src, rng=3)
    assert shares.first.size == shares.second.size == (26, 18)

    counts = block_black_counts(overlay(*shares))
    black = black_mask(src)
    assert np.all(counts[black] == 4)
    assert np.all(counts[~black] == 2)


def test_output_pixels_are_opaque_black_or_white():
    shares = encode(_make_binary(), rng=11)
    for share in shares:
        flat = share.data.reshape(-1, 4)
        assert np.all(flat[:, 3] == 255)
        assert set(np.unique(flat[:, :3])) <= {0, 255}


def test_same_draws_give_same_shares():
    src = _make_binary(size=(4, 5))
    draws = np.random.default_rng(99).integers(0, 6, size=20).tolist()
    a = encode(src, SequenceRandomSource(draws))
    b = encode(src, SequenceRandomSource(draws))
    assert np.array_equal(a.first.data, b.first.data)
    assert np.array_equal(a.second.data, b.second.data)

    c = encode(src, rng=np.random.default_rng(5))
    d = encode(src, rng=5)
    assert np.array_equal(c.first.data, d.first.data)


def test_lenient_mode_treats_non_black_as_white():
    data = np.zeros((1, 3, 4), dtype=np.uint8)
    data[0, 0] = (128, 128, 128, 255)
    data[0, 1] = (0, 0, 0, 0)
    data[0, 2] = (0, 0, 0, 255)
    shares = encode(Raster(data), SequenceRandomSource([2, 2, 2]))
    counts = block_black_counts(overlay(*shares))
    assert counts.tolist() == [[2, 2, 4]]


def test_strict_mode_rejects_gray_pixel():
    data = np.full((2, 2, 4), 255, dtype=np.uint8)
    data[1, 0] = (200, 200, 200, 255)
    with pytest.raises(InvalidInputError, match=r"\(0, 1\)"):
        encode(Raster(data), rng=0, strict=True)


def test_strict_mode_accepts_binary_raster():
    shares = encode(_make_binary(size=(3, 3)), rng=0, strict=True)
    assert shares.size == (6, 6)


def test_dimension_overflow():
    with pytest.raises(DimensionOverflowError):
        encode(Raster.blank(3, 1), rng=0, max_dimension=5)
    with pytest.raises(DimensionOverflowError):
        encode(Raster.blank(16384, 1), rng=0)


def test_exhausted_sequence_raises():
    src = Raster.from_mask([[True, False]])
    with pytest.raises(RandomSourceExhaustedError):
        encode(src, SequenceRandomSource([1]))


def test_out_of_range_draw_raises():
    with pytest.raises(RandomSourceExhaustedError):
        encode(Raster.from_mask([[False]]), SequenceRandomSource([6]))


def test_transparent_white_subpixels():
    src = Raster.from_mask([[True, False]])
    shares = encode(src, SequenceRandomSource([4, 5]), transparent_white=True)
    flat = shares.first.data.reshape(-1, 4)
    assert {tuple(p) for p in flat.tolist()} == {(0, 0, 0, 0), (0, 0, 0, 255)}
    assert block_black_counts(overlay(*shares)).tolist() == [[4, 2]]


def test_empty_raster():
    shares = encode(Raster.blank(0, 0), rng=0)
    assert shares.size == (0, 0)


def test_unsupported_random_source_type():
    with pytest.raises(TypeError):
        encode(Raster.from_mask([[True]]), rng="seed")


def test_draws_are_consumed_in_row_major_order():
    src = Raster.from_mask([[False, False, False], [False, False, False]])
    shares = encode(src, SequenceRandomSource([0, 1, 2, 3, 4, 5]))
    assert pattern_indices(shares.first).tolist() == [[0, 1, 2], [3, 4, 5]]
    assert pattern_indices(shares.second).tolist() == [[0, 1, 2], [3, 4, 5]]


def test_second_row_blocks_land_at_doubled_coordinates():
    src = Raster.from_mask([[False, True], [True, False]])
    shares = encode(src, SequenceRandomSource([1, 2, 4, 5]))

    # (1, 0) black -> pair 2; (0, 1) black -> pair 4; (1, 1) white -> pattern 5
    assert _block(shares.first, 1, 0) == list(PATTERNS[BLACK_PAIRS[2][0]])
    assert _block(shares.second, 1, 0) == list(PATTERNS[BLACK_PAIRS[2][1]])
    assert _block(shares.first, 0, 1) == list(PATTERNS[BLACK_PAIRS[4][0]])
    assert _block(shares.second, 0, 1) == list(PATTERNS[BLACK_PAIRS[4][1]])
    assert _block(shares.first, 1, 1) == _block(shares.second, 1, 1) == list(PATTERNS[5])
    assert _block(shares.first, 0, 0) == list(PATTERNS[1])
    assert block_black_counts(overlay(*shares)).tolist() == [[2, 4], [4, 2]]
