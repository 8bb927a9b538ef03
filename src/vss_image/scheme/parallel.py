"""Row-band parallel encoding with one independently seeded generator per band."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..common.random_source import GeneratorRandomSource, draw_indices, spawn_generators
from ..common.raster import Raster
from .encoder import (
    EXPANSION,
    MAX_RASTER_DIMENSION,
    SharePair,
    check_dimensions,
    classify_pixels,
    expand_blocks,
    render_subpixels,
)
from .patterns import PATTERN_BLOCKS

logger = logging.getLogger(__name__)


def row_bands(height: int, workers: int) -> List[Tuple[int, int]]:
    """Split [0, height) into at most `workers` contiguous (start, end) bands."""
    if height <= 0:
        return []
    count = max(1, min(workers, height))
    edges = np.linspace(0, height, count + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def encode_parallel(
    src: Raster,
    seed: int | Sequence[int] | None = None,
    workers: int = 4,
    *,
    strict: bool = False,
    transparent_white: bool = False,
    max_dimension: int = MAX_RASTER_DIMENSION,
) -> SharePair:
    """
    Encode a raster band by band in a thread pool.

    Band i always uses the i-th child of SeedSequence(seed), so the output is
    reproducible for a fixed (seed, workers) pair. Each band writes a disjoint
    slice of both output grids.
    """
    if workers < 1:
        raise ValueError("Require workers >= 1.")
    check_dimensions(src.width, src.height, max_dimension)
    black = classify_pixels(src, strict=strict)
    grid_a = np.zeros((EXPANSION * src.height, EXPANSION * src.width), dtype=bool)
    grid_b = np.zeros_like(grid_a)
    bands = row_bands(src.height, workers)
    generators = spawn_generators(seed, len(bands))

    def _encode_band(band: Tuple[int, int], generator: np.random.Generator) -> Tuple[int, int]:
        start, end = band
        band_black = black[start:end]
        source = GeneratorRandomSource(generator)
        draws = draw_indices(source, len(PATTERN_BLOCKS), band_black.size)
        part_a, part_b = expand_blocks(band_black, draws)
        grid_a[EXPANSION * start : EXPANSION * end] = part_a
        grid_b[EXPANSION * start : EXPANSION * end] = part_b
        return band

    with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, len(bands))) as executor:
        futures = {
            executor.submit(_encode_band, band, generator): band
            for band, generator in zip(bands, generators)
        }
        for future in concurrent.futures.as_completed(futures):
            start, end = future.result()
            logger.debug("band rows %d-%d done", start, end)

    return SharePair(
        render_subpixels(grid_a, transparent_white),
        render_subpixels(grid_b, transparent_white),
    )


__all__ = ["row_bands", "encode_parallel"]
