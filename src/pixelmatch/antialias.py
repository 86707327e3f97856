from __future__ import annotations

from pixelmatch.types import RawImage


def _neighborhood(image: RawImage, x: int, y: int) -> tuple[int, int, int, int, int]:
    x0 = max(x - 1, 0)
    y0 = max(y - 1, 0)
    x2 = min(x + 1, image.width - 1)
    y2 = min(y + 1, image.height - 1)
    # a pixel on the image edge counts as having one identical neighbor
    border = 1 if x == x0 or x == x2 or y == y0 or y == y2 else 0
    return x0, y0, x2, y2, border


def has_many_siblings(image: RawImage, x: int, y: int) -> bool:
    """
    True when at least three pixels around (x, y) have exactly the same RGBA
    value as (x, y) itself.
    """
    x0, y0, x2, y2, zeroes = _neighborhood(image, x, y)
    packed = image.packed
    width = image.width
    center = packed[y * width + x]

    for nx in range(x0, x2 + 1):
        for ny in range(y0, y2 + 1):
            if nx == x and ny == y:
                continue
            if packed[ny * width + nx] == center:
                zeroes += 1
            if zeroes > 2:
                return True

    return False


def is_antialiased(image: RawImage, x: int, y: int, other: RawImage) -> bool:
    """
    Check whether the pixel at (x, y) of ``image`` looks like an
    anti-aliased edge pixel.

    The pixel qualifies when it sits between a darker and a brighter
    neighbor, has at most two neighbors of equal brightness, and either the
    darkest or the brightest of those neighbors belongs to a flat region in
    both ``image`` and ``other``.
    """
    x0, y0, x2, y2, zeroes = _neighborhood(image, x, y)
    # luma-only color_delta against a neighbor is the difference of the two lumas
    luma = image.luma
    width = image.width
    center = luma[y * width + x]

    min_delta = 0.0
    max_delta = 0.0
    min_x = min_y = max_x = max_y = 0

    for nx in range(x0, x2 + 1):
        for ny in range(y0, y2 + 1):
            if nx == x and ny == y:
                continue

            delta = center - luma[ny * width + nx]

            if delta == 0:
                zeroes += 1
                if zeroes > 2:
                    return False
            elif delta < min_delta:
                min_delta = delta
                min_x, min_y = nx, ny
            elif delta > max_delta:
                max_delta = delta
                max_x, max_y = nx, ny

    if min_delta == 0 or max_delta == 0:
        return False

    return (
        has_many_siblings(image, min_x, min_y) and has_many_siblings(other, min_x, min_y)
    ) or (has_many_siblings(image, max_x, max_y) and has_many_siblings(other, max_x, max_y))
