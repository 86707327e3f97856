from __future__ import annotations


class PixelMatchError(Exception):
    pass


class DimensionMismatch(PixelMatchError, ValueError):
    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"image dimensions do not match: {first[0]}x{first[1]} vs {second[0]}x{second[1]}"
        )


class InvalidOption(PixelMatchError, ValueError):
    pass


class InvalidImage(PixelMatchError, ValueError):
    pass


class ImageDecodeError(PixelMatchError):
    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"failed to read {source}: {reason}")
