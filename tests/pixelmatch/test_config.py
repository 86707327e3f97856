from __future__ import annotations

import pytest

from pixelmatch.config import resolve_config
from pixelmatch.exceptions import InvalidImage, InvalidOption
from pixelmatch.types import RGB, Config, RawImage


class TestResolveConfig:
    def test_defaults(self):
        config = resolve_config()
        assert config == Config()
        assert config.threshold == 0.1
        assert config.detect_anti_aliasing is False
        assert config.alpha == 0.1
        assert config.anti_alias_color == RGB(255, 255, 0)
        assert config.diff_color == RGB(255, 0, 0)
        assert config.diff_color_alt is None
        assert config.diff_mask is False

    def test_overrides(self):
        config = resolve_config(threshold=0.3, detect_anti_aliasing=True, diff_color=(0, 0, 255))
        assert config.threshold == 0.3
        assert config.detect_anti_aliasing is True
        assert config.diff_color == RGB(0, 0, 255)
        assert isinstance(config.diff_color, RGB)

    def test_none_clears_inherited_alt_color(self):
        base = resolve_config(diff_color_alt=RGB(0, 255, 0))
        assert resolve_config(base).diff_color_alt == RGB(0, 255, 0)
        assert resolve_config(base, diff_color_alt=None).diff_color_alt is None

    def test_none_is_not_a_threshold(self):
        with pytest.raises(InvalidOption):
            resolve_config(threshold=None)

    def test_layers_on_base(self):
        base = resolve_config(threshold=0.5, diff_color_alt=RGB(0, 255, 0))
        config = resolve_config(base, alpha=0.7)
        assert config.threshold == 0.5
        assert config.alpha == 0.7
        assert config.diff_color_alt == RGB(0, 255, 0)

    def test_int_threshold_is_accepted(self):
        assert resolve_config(threshold=1).threshold == 1.0

    @pytest.mark.parametrize(
        "options",
        [
            {"threshold": 1.5},
            {"threshold": -0.1},
            {"threshold": "0.1"},
            {"alpha": 2.0},
            {"detect_anti_aliasing": "yes"},
            {"diff_color": (256, 0, 0)},
            {"diff_color": (-1, 0, 0)},
            {"diff_color": (255, 0)},
            {"anti_alias_color": "yellow"},
            {"diff_color_alt": (1.5, 0, 0)},
            {"diff_mask": 1},
            {"colour": (1, 2, 3)},
        ],
    )
    def test_invalid_options(self, options):
        with pytest.raises(InvalidOption):
            resolve_config(**options)

    def test_error_names_the_option(self):
        with pytest.raises(InvalidOption) as exc_info:
            resolve_config(threshold=3.0)
        assert "threshold" in str(exc_info.value)


class TestConfig:
    def test_frozen(self):
        config = Config()
        with pytest.raises(Exception):
            config.threshold = 0.5  # type: ignore[misc]

    def test_max_delta(self):
        assert Config(threshold=0.1).max_delta == pytest.approx(352.15)
        assert Config(threshold=0.0).max_delta == 0

    def test_resolved_diff_color_alt(self):
        assert Config().resolved_diff_color_alt == RGB(255, 0, 0)
        assert Config(diff_color_alt=RGB(1, 2, 3)).resolved_diff_color_alt == RGB(1, 2, 3)


class TestRawImage:
    def test_length_must_match_dimensions(self):
        with pytest.raises(InvalidImage):
            RawImage(width=2, height=2, pixels=bytes(15))

    def test_mutable_buffer_is_rejected(self):
        with pytest.raises(InvalidImage):
            RawImage(width=1, height=1, pixels=bytearray(4))  # type: ignore[arg-type]

    def test_negative_size(self):
        with pytest.raises(InvalidImage):
            RawImage(width=-1, height=0, pixels=b"")

    def test_pixel_lookup(self):
        img = RawImage(width=2, height=1, pixels=bytes([1, 2, 3, 4, 5, 6, 7, 8]))
        assert img.pixel(1, 0) == (5, 6, 7, 8)
        assert img.size == (2, 1)
