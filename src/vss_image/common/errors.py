"""Error kinds raised by the VSS encoder and its helpers."""

from __future__ import annotations


class VSSError(ValueError):
    """Base class for every failure of a single encode call."""


class InvalidInputError(VSSError):
    """Source raster is malformed or, in strict mode, not binary."""


class DimensionOverflowError(VSSError):
    """Doubling the source dimensions would exceed the supported raster size."""

    def __init__(self, width: int, height: int, limit: int) -> None:
        super().__init__(
            f"Share size {2 * width}x{2 * height} exceeds the maximum raster dimension {limit}."
        )
        self.width = width
        self.height = height
        self.limit = limit


class RandomSourceExhaustedError(VSSError):
    """Random source failed to deliver the requested draws."""


__all__ = [
    "VSSError",
    "InvalidInputError",
    "DimensionOverflowError",
    "RandomSourceExhaustedError",
]
