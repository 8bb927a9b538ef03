"""Pixel-expansion (2,2) visual secret sharing scheme."""

from .encoder import EXPANSION, MAX_RASTER_DIMENSION, SharePair, encode
from .overlay import block_black_counts, overlay
from .parallel import encode_parallel
from .patterns import BLACK_PAIRS, PATTERNS, check_pattern_table, pattern_bytes

__all__ = [
    "EXPANSION",
    "MAX_RASTER_DIMENSION",
    "SharePair",
    "encode",
    "encode_parallel",
    "overlay",
    "block_black_counts",
    "PATTERNS",
    "BLACK_PAIRS",
    "check_pattern_table",
    "pattern_bytes",
]
