"""Color math utilities for swatchcut.

Colors are packed 32-bit ARGB integers laid out as ``0xAARRGGBB``: alpha in the
top byte, blue in the low byte. Sorting opaque colors by their packed value
therefore orders them by red, then green, then blue.
"""

from typing import Callable, Sequence, Tuple

COLOR_WHITE = 0xFFFFFFFF
COLOR_BLACK = 0xFF000000

MIN_ALPHA_SEARCH_MAX_ITERATIONS = 10
MIN_ALPHA_SEARCH_PRECISION = 10

MIN_CONTRAST_TITLE_TEXT = 3.0
MIN_CONTRAST_BODY_TEXT = 4.5

BLACK_MAX_LIGHTNESS = 0.05
WHITE_MIN_LIGHTNESS = 0.95

# Hue/saturation window of the "red I-line" artifact rejected by the quantizer
RED_I_LINE_MIN_HUE = 10.0
RED_I_LINE_MAX_HUE = 37.0
RED_I_LINE_MAX_SATURATION = 0.82

RELATIVE_EPSILON = 1e-5

HSL = Tuple[float, float, float]


def alpha(color: int) -> int:
    """Return the alpha component of a packed color."""
    return (color >> 24) & 0xFF


def red(color: int) -> int:
    """Return the red component of a packed color."""
    return (color >> 16) & 0xFF


def green(color: int) -> int:
    """Return the green component of a packed color."""
    return (color >> 8) & 0xFF


def blue(color: int) -> int:
    """Return the blue component of a packed color."""
    return color & 0xFF


def components_of(color: int) -> Tuple[int, int, int, int]:
    """Split a packed color into its ``(a, r, g, b)`` components."""
    return alpha(color), red(color), green(color), blue(color)


def pack_argb(a: int, r: int, g: int, b: int) -> int:
    """Pack four 8-bit channels into a single ARGB integer."""
    return ((a & 0xFF) << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack an opaque color."""
    return pack_argb(0xFF, r, g, b)


def set_alpha_component(color: int, alpha_value: int) -> int:
    """Return ``color`` with its alpha channel replaced.

    Args:
        color: Packed ARGB color
        alpha_value: New alpha in [0, 255]

    Returns:
        Packed ARGB color
    """
    if not 0 <= alpha_value <= 255:
        raise ValueError(f"alpha must be between 0 and 255, got {alpha_value}")
    return (color & 0x00FFFFFF) | (alpha_value << 24)


def to_hex(color: int) -> str:
    """Format the RGB part of a packed color as ``#rrggbb``."""
    return f"#{red(color):02x}{green(color):02x}{blue(color):02x}"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """Convert RGB components to HSL.

    Args:
        r: Red in [0, 255]
        g: Green in [0, 255]
        b: Blue in [0, 255]

    Returns:
        ``(hue, saturation, lightness)`` with hue in [0, 360) and the other
        two in [0, 1]
    """
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    delta = mx - mn

    lightness = (mx + mn) / 2.0

    if mx == mn:
        # Achromatic
        hue = saturation = 0.0
    else:
        if mx == rf:
            hue = ((gf - bf) / delta) % 6.0
        elif mx == gf:
            hue = ((bf - rf) / delta) + 2.0
        else:
            hue = ((rf - gf) / delta) + 4.0
        saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))

    return (hue * 60.0) % 360.0, saturation, lightness


def color_to_hsl(color: int) -> HSL:
    """Convert a packed color to HSL, ignoring alpha."""
    return rgb_to_hsl(red(color), green(color), blue(color))


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL back to RGB components.

    Each channel is rounded half away from zero and clamped to [0, 255].
    """
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    m = l - 0.5 * c
    x = c * (1.0 - abs((h / 60.0) % 2.0 - 1.0))

    segment = int(h) // 60

    if segment == 0:
        rf, gf, bf = c + m, x + m, m
    elif segment == 1:
        rf, gf, bf = x + m, c + m, m
    elif segment == 2:
        rf, gf, bf = m, c + m, x + m
    elif segment == 3:
        rf, gf, bf = m, x + m, c + m
    elif segment == 4:
        rf, gf, bf = x + m, m, c + m
    elif segment in (5, 6):
        rf, gf, bf = c + m, m, x + m
    else:
        rf = gf = bf = 0.0

    return (
        _clamp_channel(round_half_away(255.0 * rf)),
        _clamp_channel(round_half_away(255.0 * gf)),
        _clamp_channel(round_half_away(255.0 * bf)),
    )


def hsl_to_color(hsl: Sequence[float]) -> int:
    """Convert an HSL triple to an opaque packed color."""
    return pack_rgb(*hsl_to_rgb(hsl[0], hsl[1], hsl[2]))


def _composite_alpha(foreground_alpha: int, background_alpha: int) -> int:
    return 0xFF - (((0xFF - background_alpha) * (0xFF - foreground_alpha)) // 0xFF)


def _composite_component(
    fg_c: int, fg_a: int, bg_c: int, bg_a: int, a: int
) -> int:
    if a == 0:
        return 0
    return ((0xFF * fg_c * fg_a) + (bg_c * bg_a * (0xFF - fg_a))) // (a * 0xFF)


def composite_colors(foreground: int, background: int) -> int:
    """Composite ``foreground`` over ``background`` (source-over)."""
    fg_a = alpha(foreground)
    bg_a = alpha(background)
    a = _composite_alpha(fg_a, bg_a)

    r = _composite_component(red(foreground), fg_a, red(background), bg_a, a)
    g = _composite_component(green(foreground), fg_a, green(background), bg_a, a)
    b = _composite_component(blue(foreground), fg_a, blue(background), bg_a, a)

    return pack_argb(a, r, g, b)


def _linearize(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c < 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: int) -> float:
    """Calculate the WCAG relative luminance of a packed color.

    Returns:
        Luminance in [0, 1]
    """
    return (
        0.2126 * _linearize(red(color))
        + 0.7152 * _linearize(green(color))
        + 0.0722 * _linearize(blue(color))
    )


def _biased_luminances(foreground: int, background: int) -> Tuple[float, float]:
    if alpha(background) != 0xFF:
        raise ValueError(
            f"background can not be translucent: #{background:08x}"
        )

    if alpha(foreground) < 0xFF:
        foreground = composite_colors(foreground, background)

    return relative_luminance(foreground) + 0.05, relative_luminance(background) + 0.05


def contrast_ratio(foreground: int, background: int) -> float:
    """Return the contrast value used by the reference palette library.

    This is the larger of the two biased luminances ``L + 0.05``, not a ratio.
    Use :func:`wcag_contrast_ratio` for the standard WCAG value.

    Args:
        foreground: Packed ARGB foreground, composited over ``background``
            when translucent
        background: Opaque packed background

    Returns:
        ``max(L(fg) + 0.05, L(bg) + 0.05)``
    """
    luminance1, luminance2 = _biased_luminances(foreground, background)
    return max(luminance1, luminance2)


def wcag_contrast_ratio(foreground: int, background: int) -> float:
    """Return the WCAG 2.x contrast ratio between two colors, in [1, 21]."""
    luminance1, luminance2 = _biased_luminances(foreground, background)
    return max(luminance1, luminance2) / min(luminance1, luminance2)


def minimum_alpha_for_contrast(
    foreground: int,
    background: int,
    min_contrast_ratio: float,
    ratio: Callable[[int, int], float] = wcag_contrast_ratio,
) -> Tuple[int, bool]:
    """Find the lowest alpha for ``foreground`` that reaches a contrast target.

    Binary search over [0, 255], capped at ``MIN_ALPHA_SEARCH_MAX_ITERATIONS``
    rounds and stopped once the interval is no wider than
    ``MIN_ALPHA_SEARCH_PRECISION`` alpha levels.

    Args:
        foreground: Packed foreground color, its alpha is ignored
        background: Opaque packed background color
        min_contrast_ratio: Contrast that must be met
        ratio: Contrast function to evaluate candidates with

    Returns:
        Tuple of (alpha, found). ``found`` is False when even the opaque
        foreground misses the target, in which case alpha is 0.
    """
    if alpha(background) != 0xFF:
        raise ValueError(
            f"background can not be translucent: #{background:08x}"
        )

    test_foreground = set_alpha_component(foreground, 0xFF)
    if ratio(test_foreground, background) < min_contrast_ratio:
        return 0, False

    num_iterations = 0
    min_alpha = 0
    max_alpha = 0xFF

    while (
        num_iterations <= MIN_ALPHA_SEARCH_MAX_ITERATIONS
        and (max_alpha - min_alpha) > MIN_ALPHA_SEARCH_PRECISION
    ):
        test_alpha = (min_alpha + max_alpha) // 2
        test_foreground = set_alpha_component(foreground, test_alpha)
        if ratio(test_foreground, background) < min_contrast_ratio:
            min_alpha = test_alpha
        else:
            max_alpha = test_alpha
        num_iterations += 1

    return max_alpha, True


def approx_equal(left: float, right: float) -> bool:
    """Relative-epsilon float equality."""
    if left == right:
        return True
    return abs(left - right) / (abs(left) + abs(right)) < RELATIVE_EPSILON


def approx_le(left: float, right: float) -> bool:
    """``left <= right`` tolerating float noise."""
    return left < right or approx_equal(left, right)


def approx_ge(left: float, right: float) -> bool:
    """``left >= right`` tolerating float noise."""
    return left > right or approx_equal(left, right)


def is_black(hsl: Sequence[float]) -> bool:
    return approx_le(hsl[2], BLACK_MAX_LIGHTNESS)


def is_white(hsl: Sequence[float]) -> bool:
    return approx_ge(hsl[2], WHITE_MIN_LIGHTNESS)


def is_near_red_i_line(hsl: Sequence[float]) -> bool:
    """Whether the color sits in the red I-line band of hue 10-37."""
    return (
        approx_ge(hsl[0], RED_I_LINE_MIN_HUE)
        and approx_le(hsl[0], RED_I_LINE_MAX_HUE)
        and approx_le(hsl[1], RED_I_LINE_MAX_SATURATION)
    )


def should_ignore_hsl(hsl: Sequence[float]) -> bool:
    return is_white(hsl) or is_black(hsl) or is_near_red_i_line(hsl)


def should_ignore_color(color: int) -> bool:
    """Whether a packed color is excluded from quantization results."""
    return should_ignore_hsl(color_to_hsl(color))
