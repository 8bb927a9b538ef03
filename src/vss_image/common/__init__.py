"""Raster, randomness and error helpers shared by the encoder and the pipeline."""

from .errors import (
    VSSError,
    InvalidInputError,
    DimensionOverflowError,
    RandomSourceExhaustedError,
)
from .random_source import (
    RandomSource,
    GeneratorRandomSource,
    SequenceRandomSource,
    as_random_source,
    draw_indices,
    spawn_generators,
)
from .raster import BLACK, WHITE, TRANSPARENT, Raster, black_mask, white_mask, is_binary

__all__ = [
    "VSSError",
    "InvalidInputError",
    "DimensionOverflowError",
    "RandomSourceExhaustedError",
    "RandomSource",
    "GeneratorRandomSource",
    "SequenceRandomSource",
    "as_random_source",
    "draw_indices",
    "spawn_generators",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "Raster",
    "black_mask",
    "white_mask",
    "is_binary",
]
