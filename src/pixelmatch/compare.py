from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pixelmatch.color import color_delta_array
from pixelmatch.compositor import classify_and_render, gray_pixels
from pixelmatch.exceptions import DimensionMismatch
from pixelmatch.image_io import ImageSource, load_raw_image
from pixelmatch.types import CompareResult, Config, PixelVerdict, RawImage

logger = logging.getLogger(__name__)


def compare(image_a: RawImage, image_b: RawImage, config: Config | None = None) -> CompareResult:
    """
    Compare two images of the same size pixel by pixel.

    Returns the rendered diff image together with the number of pixels that
    differ by more than the configured threshold. Anti-aliased pixels, when
    detection is enabled, are painted but not counted.
    """
    if config is None:
        config = Config()

    if image_a.size != image_b.size:
        raise DimensionMismatch(image_a.size, image_b.size)

    width, height = image_a.size
    output = np.zeros((width * height, 4), dtype=np.uint8)
    diff = 0

    if image_a.pixels == image_b.pixels:
        if not config.diff_mask:
            output[:] = gray_pixels(image_a, config.alpha)
    else:
        delta = color_delta_array(image_a.pixels, image_b.pixels)
        over = np.abs(delta) > config.max_delta
        if not config.diff_mask:
            output[~over] = gray_pixels(image_a, config.alpha)[~over]

        # only pixels over the threshold need the anti-aliasing check and a color;
        # flatnonzero keeps row-major order
        for idx in np.flatnonzero(over).tolist():
            y, x = divmod(idx, width)
            verdict, pixel = classify_and_render(
                image_a, image_b, x, y, float(delta[idx]), config
            )
            output[idx] = pixel
            if verdict is PixelVerdict.DIFFERENT:
                diff += 1

    logger.info(
        "pixelmatch.compare.finished",
        extra={
            "width": width,
            "height": height,
            "different_pixels": diff,
            "threshold": config.threshold,
            "detect_anti_aliasing": config.detect_anti_aliasing,
        },
    )

    return CompareResult(
        diff_image=RawImage(width=width, height=height, pixels=output.tobytes()),
        different_pixels=diff,
        total_pixels=width * height,
    )


def compare_images(
    before: ImageSource,
    after: ImageSource,
    config: Config | None = None,
) -> CompareResult:
    return compare(load_raw_image(before), load_raw_image(after), config)


def compare_images_batch(
    pairs: Sequence[tuple[ImageSource, ImageSource]],
    config: Config | None = None,
) -> list[CompareResult | None]:
    """
    Compare every pair in ``pairs``. A pair that cannot be compared is logged
    and yields None rather than aborting the whole batch.
    """
    return [
        _compare_single_pair(idx, before, after, config)
        for idx, (before, after) in enumerate(pairs)
    ]


def _compare_single_pair(
    idx: int,
    before: ImageSource,
    after: ImageSource,
    config: Config | None,
) -> CompareResult | None:
    try:
        return compare_images(before, after, config)
    except Exception:
        logger.exception("Failed to compare image pair %d", idx)
        return None
