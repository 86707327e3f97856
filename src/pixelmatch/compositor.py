from __future__ import annotations

import numpy as np

from pixelmatch.antialias import is_antialiased
from pixelmatch.color import blend, rgb2y
from pixelmatch.types import RGB, Config, PixelVerdict, RawImage

Pixel = tuple[int, int, int, int]

TRANSPARENT: Pixel = (0, 0, 0, 0)


def _opaque(color: RGB) -> Pixel:
    return color.r, color.g, color.b, 255


def gray_pixel(image: RawImage, pos: int, alpha: float) -> Pixel:
    """The faded grayscale rendition of the source pixel at byte offset ``pos``."""
    pixels = image.pixels
    r, g, b, a = pixels[pos], pixels[pos + 1], pixels[pos + 2], pixels[pos + 3]
    # channels are truncated, not rounded
    val = int(blend(rgb2y(r, g, b), alpha * a / 255))
    return val, val, val, 255


def gray_pixels(image: RawImage, alpha: float) -> np.ndarray:
    """``gray_pixel`` for every pixel of ``image``, as an (n, 4) uint8 array."""
    samples = np.frombuffer(image.pixels, dtype=np.uint8).reshape(-1, 4)
    y = rgb2y(
        samples[:, 0].astype(np.float64),
        samples[:, 1].astype(np.float64),
        samples[:, 2].astype(np.float64),
    )
    val = np.trunc(blend(y, alpha * samples[:, 3].astype(np.float64) / 255)).astype(np.uint8)
    out = np.empty_like(samples)
    out[:, 0] = val
    out[:, 1] = val
    out[:, 2] = val
    out[:, 3] = 255
    return out


def classify_and_render(
    image_a: RawImage,
    image_b: RawImage,
    x: int,
    y: int,
    delta: float,
    config: Config,
) -> tuple[PixelVerdict, Pixel]:
    if abs(delta) <= config.max_delta:
        if config.diff_mask:
            return PixelVerdict.MATCH, TRANSPARENT
        pos = (y * image_a.width + x) * 4
        return PixelVerdict.MATCH, gray_pixel(image_a, pos, config.alpha)

    if config.detect_anti_aliasing and (
        is_antialiased(image_a, x, y, image_b) or is_antialiased(image_b, x, y, image_a)
    ):
        if config.diff_mask:
            return PixelVerdict.ANTI_ALIASED, TRANSPARENT
        return PixelVerdict.ANTI_ALIASED, _opaque(config.anti_alias_color)

    color = config.diff_color if delta < 0 else config.resolved_diff_color_alt
    return PixelVerdict.DIFFERENT, _opaque(color)
