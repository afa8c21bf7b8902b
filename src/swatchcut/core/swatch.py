"""Swatch: a representative color and the pixel population it stands for."""

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Sequence, Tuple

from ..utils.color import (
    COLOR_BLACK,
    COLOR_WHITE,
    HSL,
    MIN_CONTRAST_BODY_TEXT,
    MIN_CONTRAST_TITLE_TEXT,
    blue,
    green,
    hsl_to_color,
    minimum_alpha_for_contrast,
    pack_rgb,
    red,
    rgb_to_hsl,
    set_alpha_component,
    to_hex,
)


@dataclass(frozen=True)
class Swatch:
    """A color swatch with its population.

    Equality is structural: two swatches with the same channels and
    population compare equal. Code that needs to tell two equal swatches
    apart (role selection, for one) must track them by identity.
    """

    red: int
    green: int
    blue: int
    population: int = 0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {value}")
        if self.population < 0:
            raise ValueError(f"population must be non-negative, got {self.population}")

    @classmethod
    def from_rgb(cls, rgb: int, population: int = 0) -> "Swatch":
        """Create a swatch from a packed color; alpha is dropped."""
        return cls(red(rgb), green(rgb), blue(rgb), population)

    @classmethod
    def from_hsl(cls, hsl: Sequence[float], population: int = 0) -> "Swatch":
        return cls.from_rgb(hsl_to_color(hsl), population)

    @property
    def rgb(self) -> int:
        """Opaque packed ARGB value."""
        return pack_rgb(self.red, self.green, self.blue)

    @property
    def hex(self) -> str:
        return to_hex(self.rgb)

    @cached_property
    def hsl(self) -> HSL:
        """``(hue, saturation, lightness)`` of this swatch."""
        return rgb_to_hsl(self.red, self.green, self.blue)

    @cached_property
    def _text_colors(self) -> Tuple[int, int]:
        """Compute ``(body, title)`` text colors that stay legible on this swatch.

        White is preferred since most swatches are dark; black is tried next.
        When neither works for both body and title, each picks whichever
        succeeded for it.
        """
        light_body_alpha, light_body_found = minimum_alpha_for_contrast(
            COLOR_WHITE, self.rgb, MIN_CONTRAST_BODY_TEXT
        )
        light_title_alpha, light_title_found = minimum_alpha_for_contrast(
            COLOR_WHITE, self.rgb, MIN_CONTRAST_TITLE_TEXT
        )

        if light_body_found and light_title_found:
            return (
                set_alpha_component(COLOR_WHITE, light_body_alpha),
                set_alpha_component(COLOR_WHITE, light_title_alpha),
            )

        dark_body_alpha, dark_body_found = minimum_alpha_for_contrast(
            COLOR_BLACK, self.rgb, MIN_CONTRAST_BODY_TEXT
        )
        dark_title_alpha, dark_title_found = minimum_alpha_for_contrast(
            COLOR_BLACK, self.rgb, MIN_CONTRAST_TITLE_TEXT
        )

        if dark_body_found and dark_title_found:
            return (
                set_alpha_component(COLOR_BLACK, dark_body_alpha),
                set_alpha_component(COLOR_BLACK, dark_title_alpha),
            )

        # Mismatched lightness between body and title
        body = (
            set_alpha_component(COLOR_WHITE, light_body_alpha)
            if light_body_found
            else set_alpha_component(COLOR_BLACK, dark_body_alpha if dark_body_found else 0xFF)
        )
        title = (
            set_alpha_component(COLOR_WHITE, light_title_alpha)
            if light_title_found
            else set_alpha_component(COLOR_BLACK, dark_title_alpha if dark_title_found else 0xFF)
        )
        return body, title

    @property
    def body_text_color(self) -> int:
        """ARGB color for body text drawn over this swatch."""
        return self._text_colors[0]

    @property
    def title_text_color(self) -> int:
        """ARGB color for title text drawn over this swatch."""
        return self._text_colors[1]

    def to_dict(self, include_text_colors: bool = False) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "hex": self.hex,
            "rgb": [self.red, self.green, self.blue],
            "hsl": [round(v, 4) for v in self.hsl],
            "population": self.population,
        }
        if include_text_colors:
            result["body_text_color"] = f"#{self.body_text_color:08x}"
            result["title_text_color"] = f"#{self.title_text_color:08x}"
        return result

    def __repr__(self) -> str:
        return f"Swatch({self.hex}, population={self.population})"
