"""Top-level package aggregating the visual secret sharing components."""

from . import common, scheme
from .analysis import pattern_frequencies, pattern_indices
from .common import (
    DimensionOverflowError,
    InvalidInputError,
    RandomSourceExhaustedError,
    Raster,
    SequenceRandomSource,
    VSSError,
)
from .config import VSSConfig
from .pipeline import ShareResult, share_image_file, share_raster
from .preprocess import binarize, load_raster, save_raster, shrink
from .scheme import BLACK_PAIRS, PATTERNS, SharePair, encode, encode_parallel, overlay

__all__ = [
    "common",
    "scheme",
    "Raster",
    "SharePair",
    "encode",
    "encode_parallel",
    "overlay",
    "PATTERNS",
    "BLACK_PAIRS",
    "binarize",
    "shrink",
    "load_raster",
    "save_raster",
    "pattern_indices",
    "pattern_frequencies",
    "VSSConfig",
    "ShareResult",
    "share_raster",
    "share_image_file",
    "SequenceRandomSource",
    "VSSError",
    "InvalidInputError",
    "DimensionOverflowError",
    "RandomSourceExhaustedError",
]
