from __future__ import annotations

from pixelmatch.antialias import has_many_siblings, is_antialiased
from pixelmatch.color import color_delta, color_delta_array, perceptual_delta
from pixelmatch.compare import compare, compare_images, compare_images_batch
from pixelmatch.compositor import classify_and_render
from pixelmatch.config import resolve_config
from pixelmatch.exceptions import (
    DimensionMismatch,
    ImageDecodeError,
    InvalidImage,
    InvalidOption,
    PixelMatchError,
)
from pixelmatch.types import RGB, CompareResult, Config, PixelVerdict, RawImage

__all__ = [
    "RGB",
    "CompareResult",
    "Config",
    "DimensionMismatch",
    "ImageDecodeError",
    "InvalidImage",
    "InvalidOption",
    "PixelMatchError",
    "PixelVerdict",
    "RawImage",
    "classify_and_render",
    "color_delta",
    "color_delta_array",
    "compare",
    "compare_images",
    "compare_images_batch",
    "has_many_siblings",
    "is_antialiased",
    "perceptual_delta",
    "resolve_config",
]
