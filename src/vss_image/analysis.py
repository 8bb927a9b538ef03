"""Pattern statistics over encoded shares."""

from __future__ import annotations

from typing import Dict, List

import numpy as np
import pandas as pd

from .common.errors import InvalidInputError
from .common.raster import Raster, black_mask
from .scheme.encoder import EXPANSION, SharePair
from .scheme.patterns import PATTERNS

_BIT_WEIGHTS = np.array([8, 4, 2, 1], dtype=np.int64)


def _code_lookup() -> np.ndarray:
    lookup = np.full(16, -1, dtype=np.int64)
    for idx, pattern in enumerate(PATTERNS):
        lookup[int(np.dot(pattern, _BIT_WEIGHTS))] = idx
    return lookup


_CODE_TO_PATTERN = _code_lookup()


def pattern_indices(share: Raster) -> np.ndarray:
    """Pattern index of every 2x2 block of a share, -1 where no pattern matches."""
    if share.width % EXPANSION or share.height % EXPANSION:
        raise InvalidInputError(f"Share size {share.size} is not a multiple of the block size.")
    h, w = share.height // EXPANSION, share.width // EXPANSION
    bits = black_mask(share).reshape(h, EXPANSION, w, EXPANSION).transpose(0, 2, 1, 3)
    codes = bits.reshape(h, w, EXPANSION * EXPANSION).astype(np.int64) @ _BIT_WEIGHTS
    return _CODE_TO_PATTERN[codes]


def pattern_frequencies(shares: SharePair, src: Raster) -> pd.DataFrame:
    """
    Count how often each pattern occurs per share, split by source pixel colour.

    Columns: share ("first"/"second"), source ("black"/"white"), pattern, count, fraction.
    A share that hides its source shows the same fractions for both colours.
    """
    if shares.first.size != (EXPANSION * src.width, EXPANSION * src.height):
        raise InvalidInputError("Shares do not match the source raster size.")
    black = black_mask(src)
    rows: List[Dict[str, object]] = []
    for name, share in (("first", shares.first), ("second", shares.second)):
        indices = pattern_indices(share)
        for colour, mask in (("black", black), ("white", ~black)):
            selected = indices[mask]
            total = selected.size
            counts = np.bincount(selected[selected >= 0], minlength=len(PATTERNS))
            for pattern, count in enumerate(counts):
                rows.append(
                    {
                        "share": name,
                        "source": colour,
                        "pattern": pattern,
                        "count": int(count),
                        "fraction": count / total if total else 0.0,
                    }
                )
    return pd.DataFrame(rows, columns=["share", "source", "pattern", "count", "fraction"])


__all__ = ["pattern_indices", "pattern_frequencies"]
