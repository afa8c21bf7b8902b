"""Tests for swatchcut color math."""

import pytest

from swatchcut.utils.color import (
    COLOR_BLACK,
    COLOR_WHITE,
    MIN_ALPHA_SEARCH_PRECISION,
    alpha,
    approx_equal,
    approx_ge,
    approx_le,
    blue,
    components_of,
    composite_colors,
    contrast_ratio,
    green,
    hsl_to_color,
    hsl_to_rgb,
    is_black,
    is_near_red_i_line,
    is_white,
    minimum_alpha_for_contrast,
    pack_argb,
    pack_rgb,
    red,
    relative_luminance,
    rgb_to_hsl,
    round_half_away,
    set_alpha_component,
    should_ignore_color,
    to_hex,
    wcag_contrast_ratio,
)


class TestPacking:
    """Channel extraction and packing."""

    def test_components_follow_argb_layout(self):
        color = pack_argb(0x12, 0x34, 0x56, 0x78)
        assert color == 0x12345678
        assert components_of(color) == (0x12, 0x34, 0x56, 0x78)
        assert (alpha(color), red(color), green(color), blue(color)) == (0x12, 0x34, 0x56, 0x78)

    def test_pack_rgb_is_opaque(self):
        assert pack_rgb(1, 2, 3) == 0xFF010203

    def test_set_alpha_component(self):
        assert set_alpha_component(COLOR_WHITE, 0x80) == 0x80FFFFFF
        assert set_alpha_component(0x00123456, 0xFF) == 0xFF123456

    @pytest.mark.parametrize("bad_alpha", [-1, 256])
    def test_set_alpha_component_rejects_out_of_range(self, bad_alpha):
        with pytest.raises(ValueError):
            set_alpha_component(COLOR_WHITE, bad_alpha)

    def test_to_hex_drops_alpha(self):
        assert to_hex(0xFF3B82F6) == "#3b82f6"
        assert to_hex(0x80000000) == "#000000"

    def test_round_half_away_from_zero(self):
        assert round_half_away(2.5) == 3
        assert round_half_away(3.5) == 4
        assert round_half_away(-2.5) == -3
        assert round_half_away(1.49) == 1


class TestHsl:
    """RGB <-> HSL conversion."""

    @pytest.mark.parametrize(
        "rgb,expected_hue",
        [
            ((255, 0, 0), 0.0),
            ((0, 255, 0), 120.0),
            ((0, 0, 255), 240.0),
            ((255, 0, 255), 300.0),
        ],
    )
    def test_primary_hues(self, rgb, expected_hue):
        h, s, l = rgb_to_hsl(*rgb)
        assert h == pytest.approx(expected_hue)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(0.5)

    def test_hue_wraps_into_positive_range(self):
        # Red is the max and blue > green, so the raw hue segment is negative
        h, _, _ = rgb_to_hsl(255, 0, 128)
        assert 0.0 <= h < 360.0
        assert h == pytest.approx(330.0, abs=0.2)

    def test_achromatic_has_zero_hue_and_saturation(self):
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert l == pytest.approx(128 / 255)

    def test_hsl_to_rgb_known_values(self):
        assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)
        assert hsl_to_rgb(120.0, 1.0, 0.5) == (0, 255, 0)
        assert hsl_to_rgb(300.0, 1.0, 0.5) == (255, 0, 255)
        assert hsl_to_rgb(0.0, 0.0, 1.0) == (255, 255, 255)
        assert hsl_to_color((240.0, 1.0, 0.5)) == 0xFF0000FF

    def test_round_trip_within_one_per_channel(self):
        for r in range(0, 256, 15):
            for g in range(0, 256, 15):
                for b in range(0, 256, 15):
                    back = hsl_to_rgb(*rgb_to_hsl(r, g, b))
                    assert abs(back[0] - r) <= 1, (r, g, b, back)
                    assert abs(back[1] - g) <= 1, (r, g, b, back)
                    assert abs(back[2] - b) <= 1, (r, g, b, back)


class TestLuminanceAndContrast:
    """Luminance, compositing and contrast."""

    def test_relative_luminance_extremes(self):
        assert relative_luminance(COLOR_BLACK) == pytest.approx(0.0)
        assert relative_luminance(COLOR_WHITE) == pytest.approx(1.0)

    def test_composite_fully_transparent_yields_background(self):
        assert composite_colors(0x00FFFFFF, COLOR_BLACK) == COLOR_BLACK

    def test_composite_half_white_over_black(self):
        assert composite_colors(set_alpha_component(COLOR_WHITE, 128), COLOR_BLACK) == 0xFF808080

    def test_contrast_ratio_returns_larger_biased_luminance(self):
        """The reference contrast value is max(L1 + 0.05, L2 + 0.05), not a ratio."""
        assert contrast_ratio(COLOR_BLACK, COLOR_WHITE) == pytest.approx(1.05)
        assert contrast_ratio(COLOR_WHITE, COLOR_BLACK) == pytest.approx(1.05)

    def test_wcag_ratio_differs_from_reference_contrast(self):
        assert wcag_contrast_ratio(COLOR_BLACK, COLOR_WHITE) == pytest.approx(21.0)
        assert wcag_contrast_ratio(COLOR_WHITE, COLOR_BLACK) == pytest.approx(21.0)
        assert contrast_ratio(COLOR_BLACK, COLOR_WHITE) != pytest.approx(
            wcag_contrast_ratio(COLOR_BLACK, COLOR_WHITE)
        )

    def test_translucent_foreground_is_composited_first(self):
        transparent_white = set_alpha_component(COLOR_WHITE, 0)
        assert wcag_contrast_ratio(transparent_white, COLOR_BLACK) == pytest.approx(1.0)
        assert contrast_ratio(transparent_white, COLOR_BLACK) == pytest.approx(0.05)

    @pytest.mark.parametrize("func", [contrast_ratio, wcag_contrast_ratio])
    def test_translucent_background_is_rejected(self, func):
        with pytest.raises(ValueError):
            func(COLOR_WHITE, 0x80000000)


class TestMinimumAlpha:
    """Binary search for the minimum alpha reaching a contrast."""

    def test_white_over_black_reaches_body_contrast(self):
        found_alpha, found = minimum_alpha_for_contrast(COLOR_WHITE, COLOR_BLACK, 4.5)

        assert found
        assert 0 < found_alpha <= 255
        meets = wcag_contrast_ratio(set_alpha_component(COLOR_WHITE, found_alpha), COLOR_BLACK)
        assert meets >= 4.5

        below = found_alpha - MIN_ALPHA_SEARCH_PRECISION
        misses = wcag_contrast_ratio(set_alpha_component(COLOR_WHITE, below), COLOR_BLACK)
        assert misses < 4.5

    def test_unreachable_target_returns_not_found(self):
        assert minimum_alpha_for_contrast(COLOR_WHITE, COLOR_WHITE, 1.5) == (0, False)

    def test_reference_contrast_never_reaches_text_targets(self):
        # max(L + 0.05) is at most 1.05, so 4.5 can not be met with it
        assert minimum_alpha_for_contrast(
            COLOR_WHITE, COLOR_BLACK, 4.5, ratio=contrast_ratio
        ) == (0, False)

    def test_reference_contrast_can_drive_the_search(self):
        found_alpha, found = minimum_alpha_for_contrast(
            COLOR_WHITE, COLOR_BLACK, 1.0, ratio=contrast_ratio
        )
        assert found
        assert 0 <= found_alpha <= 255

    def test_foreground_alpha_is_ignored(self):
        assert minimum_alpha_for_contrast(
            set_alpha_component(COLOR_WHITE, 0), COLOR_BLACK, 4.5
        ) == minimum_alpha_for_contrast(COLOR_WHITE, COLOR_BLACK, 4.5)

    def test_translucent_background_is_rejected(self):
        with pytest.raises(ValueError):
            minimum_alpha_for_contrast(COLOR_WHITE, 0x00000000, 4.5)


class TestClassification:
    """Epsilon comparisons and ignore predicates."""

    def test_epsilon_comparisons(self):
        assert approx_equal(0.0, 0.0)
        assert approx_equal(0.3, 0.3 + 1e-9)
        assert not approx_equal(0.3, 0.31)
        assert approx_le(0.4 + 1e-9, 0.4)
        assert approx_ge(0.35 - 1e-9, 0.35)
        assert not approx_le(0.41, 0.4)

    def test_black_and_white_boundaries_are_inclusive(self):
        assert is_black((0.0, 0.0, 0.05))
        assert not is_black((0.0, 0.0, 0.06))
        assert is_white((0.0, 0.0, 0.95))
        assert not is_white((0.0, 0.0, 0.94))

    def test_near_red_i_line(self):
        assert is_near_red_i_line((10.0, 0.5, 0.5))
        assert is_near_red_i_line((37.0, 0.82, 0.5))
        assert not is_near_red_i_line((20.0, 0.9, 0.5))
        assert not is_near_red_i_line((5.0, 0.5, 0.5))
        assert not is_near_red_i_line((40.0, 0.5, 0.5))

    def test_should_ignore_color(self):
        assert should_ignore_color(pack_rgb(255, 255, 255))
        assert should_ignore_color(pack_rgb(0, 0, 0))
        # Skin-tone orange: hue ~25, saturation ~0.6
        assert should_ignore_color(pack_rgb(200, 140, 100))
        assert not should_ignore_color(pack_rgb(0, 0, 255))
        assert not should_ignore_color(pack_rgb(255, 0, 0))
