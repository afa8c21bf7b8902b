"""Tests for Swatch."""

import pytest

from swatchcut.core.swatch import Swatch
from swatchcut.utils.color import (
    MIN_CONTRAST_BODY_TEXT,
    MIN_CONTRAST_TITLE_TEXT,
    alpha,
    composite_colors,
    wcag_contrast_ratio,
)


class TestSwatch:
    """Value semantics and derived colors."""

    def test_from_rgb_drops_alpha(self):
        swatch = Swatch.from_rgb(0x123B82F6, population=7)

        assert (swatch.red, swatch.green, swatch.blue) == (59, 130, 246)
        assert swatch.rgb == 0xFF3B82F6
        assert swatch.hex == "#3b82f6"
        assert swatch.population == 7

    def test_from_hsl(self):
        swatch = Swatch.from_hsl((240.0, 1.0, 0.5))

        assert swatch.rgb == 0xFF0000FF
        assert swatch.population == 0

    def test_hsl_is_cached(self):
        swatch = Swatch(0, 0, 255, 1)

        assert swatch.hsl is swatch.hsl
        assert swatch.hsl == pytest.approx((240.0, 1.0, 0.5))

    def test_equality_is_structural(self):
        assert Swatch(1, 2, 3, 4) == Swatch(1, 2, 3, 4)
        assert hash(Swatch(1, 2, 3, 4)) == hash(Swatch(1, 2, 3, 4))
        assert Swatch(1, 2, 3, 4) != Swatch(1, 2, 3, 5)
        assert Swatch(1, 2, 3, 4) is not Swatch(1, 2, 3, 4)

    def test_is_immutable(self):
        swatch = Swatch(1, 2, 3, 4)
        with pytest.raises(AttributeError):
            swatch.red = 10

    @pytest.mark.parametrize("args", [(256, 0, 0, 0), (0, -1, 0, 0), (0, 0, 0, -5)])
    def test_rejects_out_of_range_values(self, args):
        with pytest.raises(ValueError):
            Swatch(*args)

    def test_to_dict(self):
        data = Swatch(0, 0, 255, 12).to_dict(include_text_colors=True)

        assert data["hex"] == "#0000ff"
        assert data["rgb"] == [0, 0, 255]
        assert data["population"] == 12
        assert data["body_text_color"].startswith("#")
        assert len(data["body_text_color"]) == 9


class TestTextColors:
    """Body and title text colors from the contrast search."""

    def test_dark_swatch_gets_white_text(self):
        swatch = Swatch(0, 0, 128, 1)

        assert swatch.body_text_color & 0xFFFFFF == 0xFFFFFF
        assert swatch.title_text_color & 0xFFFFFF == 0xFFFFFF
        assert 0 < alpha(swatch.body_text_color) <= 255

    def test_light_swatch_gets_black_text(self):
        swatch = Swatch(255, 255, 200, 1)

        assert swatch.body_text_color & 0xFFFFFF == 0
        assert swatch.title_text_color & 0xFFFFFF == 0
        assert alpha(swatch.body_text_color) > 0

    def test_mid_gray_uses_black_for_both(self):
        # White reaches the title contrast but not the body contrast here
        swatch = Swatch(0x77, 0x77, 0x77, 1)

        assert swatch.body_text_color & 0xFFFFFF == 0
        assert swatch.title_text_color & 0xFFFFFF == 0

    @pytest.mark.parametrize("rgb", [(0, 0, 128), (255, 255, 200), (40, 160, 90), (200, 30, 60)])
    def test_text_colors_meet_their_contrast(self, rgb):
        swatch = Swatch(*rgb, population=1)

        body = composite_colors(swatch.body_text_color, swatch.rgb)
        title = composite_colors(swatch.title_text_color, swatch.rgb)

        assert wcag_contrast_ratio(body, swatch.rgb) >= MIN_CONTRAST_BODY_TEXT
        assert wcag_contrast_ratio(title, swatch.rgb) >= MIN_CONTRAST_TITLE_TEXT

    def test_text_colors_are_cached(self):
        swatch = Swatch(0, 0, 128, 1)

        first = swatch.body_text_color
        assert swatch._text_colors is swatch._text_colors
        assert swatch.body_text_color == first
