"""(2,2) visual secret sharing encoder with 2x2 pixel expansion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from ..common.errors import DimensionOverflowError, InvalidInputError
from ..common.random_source import RandomLike, as_random_source, draw_indices
from ..common.raster import BLACK, TRANSPARENT, WHITE, Raster, black_mask, white_mask
from .patterns import PAIR_TABLE, PATTERN_BLOCKS

logger = logging.getLogger(__name__)

EXPANSION = 2
MAX_RASTER_DIMENSION = 32767


@dataclass(frozen=True, eq=False)
class SharePair:
    """The two shares produced for one source raster."""

    first: Raster
    second: Raster

    def __iter__(self) -> Iterator[Raster]:
        return iter((self.first, self.second))

    @property
    def size(self) -> Tuple[int, int]:
        return self.first.size


def check_dimensions(width: int, height: int, max_dimension: int = MAX_RASTER_DIMENSION) -> None:
    if EXPANSION * width > max_dimension or EXPANSION * height > max_dimension:
        raise DimensionOverflowError(width, height, max_dimension)


def classify_pixels(src: Raster, strict: bool = False) -> np.ndarray:
    """
    Return the (h, w) black mask of a source raster.

    Lenient mode treats anything that is not exactly opaque black as white.
    Strict mode rejects pixels that are neither opaque black nor opaque white.
    """
    black = black_mask(src)
    if strict:
        stray = ~(black | white_mask(src))
        if stray.any():
            ys, xs = np.nonzero(stray)
            x, y = int(xs[0]), int(ys[0])
            raise InvalidInputError(
                f"Pixel ({x}, {y}) = {src.pixel(x, y)} is neither black nor white "
                f"({int(stray.sum())} non-binary pixels in total)."
            )
    return black


def expand_blocks(black: np.ndarray, draws: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map per-pixel colours and draws to the two (2h, 2w) boolean sub-pixel grids.

    Black pixels take BLACK_PAIRS[r]; white pixels put PATTERNS[r] in both shares.
    """
    h, w = black.shape
    r = draws.reshape(h, w)
    idx_a = np.where(black, PAIR_TABLE[r, 0], r)
    idx_b = np.where(black, PAIR_TABLE[r, 1], r)
    # (h, w, 2, 2) -> (h, 2, w, 2) puts each block's rows next to its source row.
    grid_a = PATTERN_BLOCKS[idx_a].transpose(0, 2, 1, 3).reshape(EXPANSION * h, EXPANSION * w)
    grid_b = PATTERN_BLOCKS[idx_b].transpose(0, 2, 1, 3).reshape(EXPANSION * h, EXPANSION * w)
    return grid_a, grid_b


def render_subpixels(grid: np.ndarray, transparent_white: bool = False) -> Raster:
    """Turn a boolean sub-pixel grid (True = black) into an RGBA raster."""
    white = np.asarray(TRANSPARENT if transparent_white else WHITE, dtype=np.uint8)
    black = np.asarray(BLACK, dtype=np.uint8)
    rgba = np.where(grid[..., None], black, white).astype(np.uint8)
    return Raster(rgba)


def encode(
    src: Raster,
    rng: RandomLike = None,
    *,
    strict: bool = False,
    transparent_white: bool = False,
    max_dimension: int = MAX_RASTER_DIMENSION,
) -> SharePair:
    """
    Split a binary raster into two shares of twice its width and height.

    One draw in [0, 6) is taken per source pixel in row-major order, so a
    fixed sequence of draws always yields the same shares.
    """
    check_dimensions(src.width, src.height, max_dimension)
    black = classify_pixels(src, strict=strict)
    source = as_random_source(rng)
    draws = draw_indices(source, len(PATTERN_BLOCKS), src.width * src.height)
    grid_a, grid_b = expand_blocks(black, draws)
    logger.debug(
        "encoded %dx%d raster (%d black pixels) into %dx%d shares",
        src.width,
        src.height,
        int(black.sum()),
        EXPANSION * src.width,
        EXPANSION * src.height,
    )
    return SharePair(
        render_subpixels(grid_a, transparent_white),
        render_subpixels(grid_b, transparent_white),
    )


__all__ = [
    "EXPANSION",
    "MAX_RASTER_DIMENSION",
    "SharePair",
    "check_dimensions",
    "classify_pixels",
    "expand_blocks",
    "render_subpixels",
    "encode",
]
