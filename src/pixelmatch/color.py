"""
YIQ based perceptual color distance.

The weights follow "Measuring perceived color difference using YIQ NTSC
transmission color space in mobile applications" (Kotsarenko & Ramos, 2010)
and have to stay exactly as written, otherwise diff images stop matching
those produced by mapbox pixelmatch.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def rgb2y(r: float, g: float, b: float) -> float:
    return r * 0.29889531 + g * 0.58662247 + b * 0.11448223


def rgb2i(r: float, g: float, b: float) -> float:
    return r * 0.59597799 - g * 0.27417610 - b * 0.32180189


def rgb2q(r: float, g: float, b: float) -> float:
    return r * 0.21147017 - g * 0.52261711 + b * 0.31114694


def blend(c: float, a: float) -> float:
    """Blend a channel value of opacity ``a`` (0..1) onto white."""
    return 255 + (c - 255) * a


def color_delta(
    img1: bytes | bytearray,
    img2: bytes | bytearray,
    k: int,
    m: int,
    luma_only: bool = False,
) -> float:
    """
    Signed perceptual distance between the pixel at byte offset ``k`` of
    ``img1`` and the pixel at offset ``m`` of ``img2``.

    With ``luma_only`` the plain brightness difference ``Y1 - Y2`` is
    returned. Otherwise the squared YIQ distance is returned, negated when
    the first pixel is the brighter one.
    """
    r1: float = img1[k]
    g1: float = img1[k + 1]
    b1: float = img1[k + 2]
    a1: float = img1[k + 3]
    r2: float = img2[m]
    g2: float = img2[m + 1]
    b2: float = img2[m + 2]
    a2: float = img2[m + 3]

    if a1 == a2 and r1 == r2 and g1 == g2 and b1 == b2:
        return 0

    if a1 < 255:
        a1 /= 255
        r1 = blend(r1, a1)
        g1 = blend(g1, a1)
        b1 = blend(b1, a1)

    if a2 < 255:
        a2 /= 255
        r2 = blend(r2, a2)
        g2 = blend(g2, a2)
        b2 = blend(b2, a2)

    y1 = rgb2y(r1, g1, b1)
    y2 = rgb2y(r2, g2, b2)
    y = y1 - y2

    if luma_only:
        return y

    i = rgb2i(r1, g1, b1) - rgb2i(r2, g2, b2)
    q = rgb2q(r1, g1, b1) - rgb2q(r2, g2, b2)

    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q

    return -delta if y1 > y2 else delta


def perceptual_delta(
    pixel_a: Sequence[int], pixel_b: Sequence[int], luma_only: bool = False
) -> float:
    return color_delta(bytes(pixel_a), bytes(pixel_b), 0, 0, luma_only)


def _blended_channels(pixels: bytes) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    samples = np.frombuffer(pixels, dtype=np.uint8).reshape(-1, 4).astype(np.float64)
    a = samples[:, 3] / 255
    # blending an opaque channel onto white is exact, so every sample goes through it
    return blend(samples[:, 0], a), blend(samples[:, 1], a), blend(samples[:, 2], a)


def luma_values(pixels: bytes) -> np.ndarray:
    """Per-pixel luma of an RGBA buffer, as ``color_delta`` computes it."""
    return rgb2y(*_blended_channels(pixels))


def color_delta_array(pixels1: bytes, pixels2: bytes) -> np.ndarray:
    """
    ``color_delta`` for every pixel of two equally sized RGBA buffers.

    The arithmetic runs in the same order as the scalar version, so each
    element is bit-identical to the corresponding ``color_delta`` result.
    """
    r1, g1, b1 = _blended_channels(pixels1)
    r2, g2, b2 = _blended_channels(pixels2)

    y1 = rgb2y(r1, g1, b1)
    y2 = rgb2y(r2, g2, b2)
    y = y1 - y2
    i = rgb2i(r1, g1, b1) - rgb2i(r2, g2, b2)
    q = rgb2q(r1, g1, b1) - rgb2q(r2, g2, b2)

    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q
    delta = np.where(y1 > y2, -delta, delta)

    identical = np.frombuffer(pixels1, dtype="<u4") == np.frombuffer(pixels2, dtype="<u4")
    delta[identical] = 0
    return delta
