from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from pixelmatch.exceptions import ImageDecodeError
from pixelmatch.types import RawImage

ImageSource = bytes | str | Path | Image.Image | RawImage


def _open(source: bytes | str | Path) -> Image.Image:
    name = "<bytes>" if isinstance(source, bytes) else str(source)
    try:
        if isinstance(source, bytes):
            img = Image.open(io.BytesIO(source))
        else:
            img = Image.open(source)
    except (OSError, UnidentifiedImageError) as e:
        raise ImageDecodeError(name, str(e)) from e
    try:
        img.load()
    except OSError as e:
        img.close()
        raise ImageDecodeError(name, str(e)) from e
    return img


def load_raw_image(source: ImageSource) -> RawImage:
    """Decode ``source`` into a RawImage, converting to RGBA as needed."""
    if isinstance(source, RawImage):
        return source
    if isinstance(source, Image.Image):
        return _from_pil(source)

    img = _open(source)
    try:
        return _from_pil(img)
    finally:
        img.close()


def _from_pil(img: Image.Image) -> RawImage:
    if img.mode == "RGBA":
        return RawImage(width=img.width, height=img.height, pixels=img.tobytes())
    rgba = img.convert("RGBA")
    try:
        return RawImage(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())
    finally:
        rgba.close()


def to_pil_image(raw: RawImage) -> Image.Image:
    return Image.frombytes("RGBA", raw.size, raw.pixels)


def save_raw_image(raw: RawImage, path: str | Path) -> None:
    img = to_pil_image(raw)
    try:
        img.save(path, "PNG")
    finally:
        img.close()
