from __future__ import annotations

import pytest
from PIL import Image

from pixelmatch.exceptions import ImageDecodeError
from pixelmatch.image_io import load_raw_image, save_raw_image, to_pil_image
from pixelmatch.types import RawImage


class TestLoadRawImage:
    def test_rgba_image(self):
        img = Image.new("RGBA", (4, 3), (10, 20, 30, 40))
        raw = load_raw_image(img)
        assert raw.size == (4, 3)
        assert raw.pixel(3, 2) == (10, 20, 30, 40)

    def test_rgb_image_is_converted(self):
        raw = load_raw_image(Image.new("RGB", (2, 2), (1, 2, 3)))
        assert raw.pixel(0, 0) == (1, 2, 3, 255)

    def test_raw_image_passthrough(self):
        raw = RawImage(width=1, height=1, pixels=bytes(4))
        assert load_raw_image(raw) is raw

    def test_path(self, tmp_path):
        path = tmp_path / "img.png"
        Image.new("RGBA", (5, 5), (9, 8, 7, 255)).save(path)
        raw = load_raw_image(path)
        assert raw.pixel(4, 4) == (9, 8, 7, 255)
        assert load_raw_image(str(path)) == raw

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            load_raw_image(tmp_path / "missing.png")

    def test_undecodable_bytes(self):
        with pytest.raises(ImageDecodeError) as exc_info:
            load_raw_image(b"definitely not an image")
        assert exc_info.value.source == "<bytes>"
        assert exc_info.value.reason


class TestSaveRawImage:
    def test_round_trip_through_png(self, tmp_path):
        raw = RawImage(width=2, height=1, pixels=bytes([255, 0, 0, 255, 0, 0, 0, 0]))
        path = tmp_path / "diff.png"
        save_raw_image(raw, path)
        assert load_raw_image(path) == raw

    def test_to_pil_image(self):
        raw = RawImage(width=3, height=2, pixels=bytes(range(24)))
        img = to_pil_image(raw)
        assert img.mode == "RGBA"
        assert img.size == (3, 2)
        assert img.getpixel((0, 0)) == (0, 1, 2, 3)
