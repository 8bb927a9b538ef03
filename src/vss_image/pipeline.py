"""Load -> shrink -> binarize -> encode -> save, for a single image."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import numpy as np

from .common.random_source import RandomLike
from .common.raster import Raster
from .config import VSSConfig
from .preprocess import binarize, load_raster, save_raster, shrink
from .scheme.encoder import SharePair, encode
from .scheme.overlay import overlay
from .scheme.parallel import encode_parallel

logger = logging.getLogger(__name__)

OUTPUT_NAMES = {
    "shrunk": "shrunk.png",
    "binary": "binary.png",
    "share_a": "share_a.png",
    "share_b": "share_b.png",
    "overlay": "overlay.png",
}


@dataclass
class ShareResult:
    """Every intermediate raster of one run, plus where they were written."""

    shrunk: Raster
    binary: Raster
    shares: SharePair
    stacked: Raster
    paths: Dict[str, Path] = field(default_factory=dict)

    def rasters(self) -> Dict[str, Raster]:
        return {
            "shrunk": self.shrunk,
            "binary": self.binary,
            "share_a": self.shares.first,
            "share_b": self.shares.second,
            "overlay": self.stacked,
        }


def encode_with_config(binary: Raster, config: VSSConfig, rng: RandomLike = None) -> SharePair:
    """Serial encode, or row-band parallel encode when config.workers > 1 and rng is a seed."""
    options = dict(
        transparent_white=config.transparent_white,
        max_dimension=config.max_dimension,
    )
    if config.workers > 1:
        if rng is None or isinstance(rng, (int, np.integer)):
            return encode_parallel(binary, seed=rng, workers=config.workers, **options)
        logger.debug("workers=%d ignored: parallel encoding needs an integer seed", config.workers)
    return encode(binary, rng, **options)


def share_raster(src: Raster, config: VSSConfig | None = None, rng: RandomLike = None) -> ShareResult:
    config = config or VSSConfig()
    shrunk = shrink(src, config.max_width, config.max_height)
    binary = binarize(shrunk, config.threshold)
    shares = encode_with_config(binary, config, rng)
    return ShareResult(shrunk=shrunk, binary=binary, shares=shares, stacked=overlay(*shares))


def save_result(result: ShareResult, out_dir: str | Path) -> Dict[str, Path]:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    for key, raster in result.rasters().items():
        result.paths[key] = save_raster(raster, out / OUTPUT_NAMES[key])
    return result.paths


def share_image_file(
    image_path: str | Path,
    out_dir: str | Path,
    config: VSSConfig | None = None,
    rng: RandomLike = None,
) -> ShareResult:
    """Produce both shares of an image file and write all stages as PNGs into out_dir."""
    src = load_raster(image_path)
    result = share_raster(src, config, rng)
    save_result(result, out_dir)
    logger.debug("wrote %d files to %s", len(result.paths), out_dir)
    return result


__all__ = [
    "OUTPUT_NAMES",
    "ShareResult",
    "encode_with_config",
    "share_raster",
    "save_result",
    "share_image_file",
]
