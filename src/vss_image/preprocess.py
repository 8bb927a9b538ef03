"""Steps upstream of the encoder: raster codec, power-of-two downscaling and thresholding."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from .common.errors import InvalidInputError
from .common.raster import Raster

logger = logging.getLogger(__name__)

# Rec. 709 luma weights, scaled by LUMA_SCALE so sums stay exact in integers.
LUMA_SCALE = 10000
LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.int64)
DEFAULT_THRESHOLD = 128
MAX_IMAGE_WIDTH = 300
MAX_IMAGE_HEIGHT = 300


def raster_from_image(img: Image.Image) -> Raster:
    """Convert any Pillow image to an RGBA raster."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return Raster(np.array(img, dtype=np.uint8))


def raster_to_image(raster: Raster) -> Image.Image:
    return Image.fromarray(raster.data)


def load_raster(path: str | Path) -> Raster:
    """Decode an image file, applying its EXIF orientation."""
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        raster = raster_from_image(img)
    logger.debug("loaded %s as %dx%d raster", path, raster.width, raster.height)
    return raster


def save_raster(raster: Raster, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    raster_to_image(raster).save(out)
    return out


def scaled_luminance(raster: Raster) -> np.ndarray:
    """Per-pixel luma times LUMA_SCALE, shape (h, w), int64."""
    return raster.data[..., :3].astype(np.int64) @ LUMA_WEIGHTS


def luminance(raster: Raster) -> np.ndarray:
    """Per-pixel luma, shape (h, w), float64 in [0, 255]."""
    return scaled_luminance(raster) / LUMA_SCALE


def binarize(raster: Raster, threshold: float = DEFAULT_THRESHOLD) -> Raster:
    """
    Map each pixel to opaque white if its luma >= threshold, opaque black otherwise.

    The source alpha channel is ignored.
    """
    white = scaled_luminance(raster) >= threshold * LUMA_SCALE
    return Raster.from_mask(~white)


def shrink_scale(width: int, height: int, max_width: int, max_height: int) -> int:
    """Power-of-two divisor that brings (width, height) within bounds; 1 if already within."""
    if max_width <= 0 or max_height <= 0:
        raise InvalidInputError("Maximum width and height must be positive.")
    if width <= max_width and height <= max_height:
        return 1
    ratio = max(width / max_width, height / max_height)
    exp = max(1, math.ceil(math.log2(ratio)))
    return 2**exp


def shrink(
    raster: Raster,
    max_width: int = MAX_IMAGE_WIDTH,
    max_height: int = MAX_IMAGE_HEIGHT,
) -> Raster:
    """Halve the raster repeatedly (in one resample) until it fits max_width x max_height."""
    scale = shrink_scale(raster.width, raster.height, max_width, max_height)
    if scale == 1:
        return raster
    sw = max(1, raster.width // scale)
    sh = max(1, raster.height // scale)
    logger.debug("shrinking %dx%d by 1/%d to %dx%d", raster.width, raster.height, scale, sw, sh)
    resized = raster_to_image(raster).resize((sw, sh), Image.BILINEAR)
    return raster_from_image(resized)


__all__ = [
    "LUMA_SCALE",
    "LUMA_WEIGHTS",
    "DEFAULT_THRESHOLD",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
    "raster_from_image",
    "raster_to_image",
    "load_raster",
    "save_raster",
    "scaled_luminance",
    "luminance",
    "binarize",
    "shrink_scale",
    "shrink",
]
