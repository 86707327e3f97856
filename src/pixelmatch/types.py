from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import cached_property
from typing import Annotated, NamedTuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from pixelmatch.color import luma_values
from pixelmatch.exceptions import InvalidImage

Channel = Annotated[int, Field(ge=0, le=255, strict=True)]


class RGB(NamedTuple):
    r: Channel
    g: Channel
    b: Channel


@dataclass(frozen=True)
class RawImage:
    """
    A decoded image: ``width * height`` RGBA samples, row-major, one byte per
    channel.
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.pixels, bytes):
            raise InvalidImage(f"pixel buffer must be bytes, not {type(self.pixels).__name__}")
        if self.width < 0 or self.height < 0:
            raise InvalidImage(f"invalid image size {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise InvalidImage(
                f"pixel buffer has {len(self.pixels)} bytes, "
                f"expected {expected} for a {self.width}x{self.height} RGBA image"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        pos = (y * self.width + x) * 4
        r, g, b, a = self.pixels[pos : pos + 4]
        return r, g, b, a

    @cached_property
    def luma(self) -> list[float]:
        return luma_values(self.pixels).tolist()

    @cached_property
    def packed(self) -> list[int]:
        # one int per pixel, equal iff all four channels are equal
        return np.frombuffer(self.pixels, dtype="<u4").tolist()


class Config(BaseModel):
    """
    Resolved comparison parameters.

    ``detect_anti_aliasing`` defaults to False. Note that mapbox pixelmatch
    runs its anti-aliasing check unless told otherwise, so enable it to get
    the same counts as that tool.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    threshold: float = Field(default=0.1, ge=0.0, le=1.0, strict=True)
    detect_anti_aliasing: bool = Field(default=False, strict=True)
    alpha: float = Field(default=0.1, ge=0.0, le=1.0, strict=True)
    anti_alias_color: RGB = RGB(255, 255, 0)
    diff_color: RGB = RGB(255, 0, 0)
    diff_color_alt: RGB | None = None
    diff_mask: bool = Field(default=False, strict=True)

    @property
    def max_delta(self) -> float:
        # 35215 is the largest value the YIQ metric can produce
        return 35215 * self.threshold * self.threshold

    @property
    def resolved_diff_color_alt(self) -> RGB:
        if self.diff_color_alt is None:
            return self.diff_color
        return self.diff_color_alt


class PixelVerdict(StrEnum):
    MATCH = "match"
    ANTI_ALIASED = "anti_aliased"
    DIFFERENT = "different"


class CompareResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    diff_image: RawImage
    different_pixels: int = Field(ge=0)
    total_pixels: int = Field(ge=0)

    @property
    def diff_ratio(self) -> float:
        if not self.total_pixels:
            return 0.0
        return self.different_pixels / self.total_pixels
