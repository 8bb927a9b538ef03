"""In-memory RGBA raster used by the encoder, independent of any drawing surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from .errors import InvalidInputError

CHANNELS = 4
BLACK: Tuple[int, int, int, int] = (0, 0, 0, 255)
WHITE: Tuple[int, int, int, int] = (255, 255, 255, 255)
TRANSPARENT: Tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass(frozen=True, eq=False)
class Raster:
    """
    Row-major RGBA pixel grid.

    data: contiguous uint8 array of shape (height, width, 4).
    """

    data: np.ndarray

    def __post_init__(self) -> None:
        arr = self.data
        if not isinstance(arr, np.ndarray):
            raise InvalidInputError("Raster data must be a numpy array.")
        if arr.dtype != np.uint8:
            raise InvalidInputError(f"Raster data must be uint8, got {arr.dtype}.")
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidInputError(f"Raster data must have shape (h, w, 4), got {arr.shape}.")
        if not arr.flags.c_contiguous:
            object.__setattr__(self, "data", np.ascontiguousarray(arr))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def channels(self) -> int:
        return CHANNELS

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * CHANNELS

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.data[y, x])
        return r, g, b, a

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def copy(self) -> "Raster":
        return Raster(self.data.copy())

    @classmethod
    def blank(cls, width: int, height: int, fill: Sequence[int] = WHITE) -> "Raster":
        if width < 0 or height < 0:
            raise InvalidInputError("Raster dimensions must be non-negative.")
        arr = np.empty((height, width, CHANNELS), dtype=np.uint8)
        arr[...] = np.asarray(fill, dtype=np.uint8)
        return cls(arr)

    @classmethod
    def from_bytes(cls, buf: bytes, width: int, height: int) -> "Raster":
        """Wrap a flat RGBA byte buffer (stride = 4 * width)."""
        expected = width * height * CHANNELS
        if width < 0 or height < 0 or len(buf) != expected:
            raise InvalidInputError(
                f"Buffer of {len(buf)} bytes does not match {width}x{height} RGBA ({expected} bytes)."
            )
        arr = np.frombuffer(buf, dtype=np.uint8).reshape(height, width, CHANNELS).copy()
        return cls(arr)

    @classmethod
    def from_mask(cls, black: Iterable[Iterable[bool]] | np.ndarray) -> "Raster":
        """Build a binary raster from a 2-D mask where True means black."""
        mask = np.asarray(black, dtype=bool)
        if mask.ndim != 2:
            raise InvalidInputError("Mask must be two-dimensional.")
        arr = np.where(mask[..., None], np.uint8(0), np.uint8(255)).astype(np.uint8)
        arr = np.repeat(arr, CHANNELS, axis=2)
        arr[..., 3] = 255
        return cls(arr)


def black_mask(raster: Raster) -> np.ndarray:
    """Boolean (h, w) mask of pixels that are exactly opaque black."""
    return np.all(raster.data == np.asarray(BLACK, dtype=np.uint8), axis=-1)


def white_mask(raster: Raster) -> np.ndarray:
    """Boolean (h, w) mask of pixels that are exactly opaque white."""
    return np.all(raster.data == np.asarray(WHITE, dtype=np.uint8), axis=-1)


def is_binary(raster: Raster) -> bool:
    return bool(np.all(black_mask(raster) | white_mask(raster)))


__all__ = [
    "CHANNELS",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "Raster",
    "black_mask",
    "white_mask",
    "is_binary",
]
