"""Black-dominant stacking of shares, as when printed transparencies are laid on top of each other."""

from __future__ import annotations

import numpy as np

from ..common.errors import InvalidInputError
from ..common.raster import BLACK, WHITE, Raster, black_mask
from .encoder import EXPANSION


def overlay(first: Raster, second: Raster) -> Raster:
    """Sub-pixel is black if either share is black there, opaque white otherwise."""
    if first.size != second.size:
        raise InvalidInputError(f"Share sizes differ: {first.size} vs {second.size}.")
    stacked = black_mask(first) | black_mask(second)
    rgba = np.where(
        stacked[..., None],
        np.asarray(BLACK, dtype=np.uint8),
        np.asarray(WHITE, dtype=np.uint8),
    ).astype(np.uint8)
    return Raster(rgba)


def block_black_counts(raster: Raster) -> np.ndarray:
    """Number of black sub-pixels in each 2x2 block, shape (h / 2, w / 2)."""
    if raster.width % EXPANSION or raster.height % EXPANSION:
        raise InvalidInputError(f"Raster size {raster.size} is not a multiple of the block size.")
    mask = black_mask(raster)
    h, w = raster.height // EXPANSION, raster.width // EXPANSION
    return mask.reshape(h, EXPANSION, w, EXPANSION).sum(axis=(1, 3))


__all__ = ["overlay", "block_black_counts"]
