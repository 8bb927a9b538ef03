"""Settings for the share-generation pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from .preprocess import DEFAULT_THRESHOLD, MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from .scheme.encoder import MAX_RASTER_DIMENSION

ENV_PREFIX = "VSS_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Cannot parse {name}={raw!r} as a boolean.")


@dataclass(frozen=True)
class VSSConfig:
    """
    threshold: luma cut-off for binarization (>= threshold is white)
    max_width / max_height: bounds for the power-of-two downscaler
    transparent_white: write white sub-pixels as fully transparent
    workers: >1 switches to row-band parallel encoding
    """

    threshold: float = DEFAULT_THRESHOLD
    max_width: int = MAX_IMAGE_WIDTH
    max_height: int = MAX_IMAGE_HEIGHT
    transparent_white: bool = False
    workers: int = 1
    max_dimension: int = MAX_RASTER_DIMENSION

    def __post_init__(self) -> None:
        if not (0 <= self.threshold <= 256):
            raise ValueError("Require 0 <= threshold <= 256.")
        if self.max_width < 1 or self.max_height < 1:
            raise ValueError("Require positive max_width and max_height.")
        if self.workers < 1:
            raise ValueError("Require workers >= 1.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "VSSConfig":
        """Defaults overridden by VSS_THRESHOLD, VSS_MAX_WIDTH, VSS_MAX_HEIGHT, VSS_TRANSPARENT, VSS_WORKERS."""
        env = os.environ if environ is None else environ
        overrides = {}
        if f"{ENV_PREFIX}THRESHOLD" in env:
            overrides["threshold"] = float(env[f"{ENV_PREFIX}THRESHOLD"])
        for key in ("max_width", "max_height", "workers"):
            name = f"{ENV_PREFIX}{key.upper()}"
            if name in env:
                overrides[key] = int(env[name])
        if f"{ENV_PREFIX}TRANSPARENT" in env:
            overrides["transparent_white"] = _parse_bool(
                f"{ENV_PREFIX}TRANSPARENT", env[f"{ENV_PREFIX}TRANSPARENT"]
            )
        return cls(**overrides)

    def with_overrides(self, **changes) -> "VSSConfig":
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["ENV_PREFIX", "VSSConfig"]
