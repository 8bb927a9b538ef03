"""Fixed 2x2 sub-pixel patterns and black pairs of the (2,2) visual sharing scheme."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..common.raster import BLACK, TRANSPARENT, WHITE

B, W = 1, 0

# Row-major 2x2 blocks (top-left, top-right, bottom-left, bottom-right), 1 = black.
PATTERNS: Tuple[Tuple[int, int, int, int], ...] = (
    (W, W, B, B),
    (B, B, W, W),
    (W, B, W, B),
    (B, W, B, W),
    (W, B, B, W),
    (B, W, W, B),
)

BLACK_PAIRS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 0),
    (2, 3),
    (3, 2),
    (4, 5),
    (5, 4),
)

# (6, 2, 2) boolean view of PATTERNS and (6, 2) array of BLACK_PAIRS for vectorised lookup.
PATTERN_BLOCKS = np.asarray(PATTERNS, dtype=bool).reshape(len(PATTERNS), 2, 2)
PAIR_TABLE = np.asarray(BLACK_PAIRS, dtype=np.int64)


def pattern_bytes(index: int, transparent_white: bool = False) -> bytes:
    """16-byte RGBA rendering of a pattern, sub-pixels in row-major order."""
    white = TRANSPARENT if transparent_white else WHITE
    out = bytearray()
    for bit in PATTERNS[index]:
        out.extend(BLACK if bit else white)
    return bytes(out)


def black_or(first: Sequence[int], second: Sequence[int]) -> Tuple[int, ...]:
    """Black-dominant sub-pixel merge of two patterns."""
    return tuple(int(a or b) for a, b in zip(first, second))


def check_pattern_table(
    patterns: Sequence[Sequence[int]] = PATTERNS,
    pairs: Sequence[Tuple[int, int]] = BLACK_PAIRS,
) -> List[str]:
    """
    Check the invariants the encoder relies on and return a list of problems.

    - every pattern has 4 sub-pixels, exactly 2 of them black
    - every pair merges to an all-black block
    - every pattern appears once as first and once as second pair element
    """
    problems: List[str] = []
    for idx, pattern in enumerate(patterns):
        if len(pattern) != 4:
            problems.append(f"pattern {idx} has {len(pattern)} sub-pixels")
        elif sum(1 for bit in pattern if bit) != 2:
            problems.append(f"pattern {idx} does not have exactly two black sub-pixels")
    for i, j in pairs:
        if black_or(patterns[i], patterns[j]) != (B, B, B, B):
            problems.append(f"pair ({i}, {j}) does not cover the block")
    count = len(patterns)
    if sorted(i for i, _ in pairs) != list(range(count)):
        problems.append("not every pattern is a first pair element exactly once")
    if sorted(j for _, j in pairs) != list(range(count)):
        problems.append("not every pattern is a second pair element exactly once")
    return problems


__all__ = [
    "PATTERNS",
    "BLACK_PAIRS",
    "PATTERN_BLOCKS",
    "PAIR_TABLE",
    "pattern_bytes",
    "black_or",
    "check_pattern_table",
]
