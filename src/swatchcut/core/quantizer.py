"""Median-cut color quantizer."""

from typing import Dict, List

from ..utils.color import (
    alpha,
    blue,
    green,
    pack_argb,
    red,
    round_half_away,
    should_ignore_color,
)
from ..utils.logging import get_logger
from .histogram import ColorHistogram, PixelInput
from .priority_queue import PriorityQueue
from .swatch import Swatch

logger = get_logger(__name__)

COMPONENT_RED = "red"
COMPONENT_GREEN = "green"
COMPONENT_BLUE = "blue"

DEFAULT_MAX_COLORS = 16

_CHANNEL_GETTERS = {
    COMPONENT_RED: red,
    COMPONENT_GREEN: green,
    COMPONENT_BLUE: blue,
}


def _modify_significant_octet(color: int, dimension: str) -> int:
    """Swap channels so ``dimension`` becomes the most significant color byte.

    The swap is its own inverse.
    """
    if dimension == COMPONENT_GREEN:
        # RGB <-> GRB
        return pack_argb(alpha(color), green(color), red(color), blue(color))
    if dimension == COMPONENT_BLUE:
        # RGB <-> BGR
        return pack_argb(alpha(color), blue(color), green(color), red(color))
    return color


class VBox:
    """A contiguous, inclusive range ``[lower, upper]`` of the quantizer's color array."""

    def __init__(self, quantizer: "ColorCutQuantizer", lower_index: int, upper_index: int):
        """Initialize a box and fit its channel bounds.

        Args:
            quantizer: Quantizer owning the shared color array
            lower_index: First index in the box
            upper_index: Last index in the box
        """
        self._quantizer = quantizer
        self.lower_index = lower_index
        self.upper_index = upper_index

        self.min_red = self.max_red = 0
        self.min_green = self.max_green = 0
        self.min_blue = self.max_blue = 0

        self.fit_box()

    @property
    def volume(self) -> int:
        return (
            (self.max_red - self.min_red + 1)
            * (self.max_green - self.min_green + 1)
            * (self.max_blue - self.min_blue + 1)
        )

    @property
    def color_count(self) -> int:
        return self.upper_index - self.lower_index + 1

    @property
    def can_split(self) -> bool:
        return self.color_count > 1

    @property
    def longest_color_dimension(self) -> str:
        """Channel with the widest range; red wins ties, then green."""
        red_length = self.max_red - self.min_red
        green_length = self.max_green - self.min_green
        blue_length = self.max_blue - self.min_blue

        if red_length >= green_length and red_length >= blue_length:
            return COMPONENT_RED
        if green_length >= red_length and green_length >= blue_length:
            return COMPONENT_GREEN
        return COMPONENT_BLUE

    def fit_box(self) -> None:
        """Recompute the per-channel min/max over the box's colors."""
        if self.lower_index > self.upper_index:
            raise ValueError(
                f"Invalid box range: lower {self.lower_index} > upper {self.upper_index}"
            )

        colors = self._quantizer.colors[self.lower_index : self.upper_index + 1]
        reds = [red(c) for c in colors]
        greens = [green(c) for c in colors]
        blues = [blue(c) for c in colors]

        self.min_red, self.max_red = min(reds), max(reds)
        self.min_green, self.max_green = min(greens), max(greens)
        self.min_blue, self.max_blue = min(blues), max(blues)

    def mid_point(self, dimension: str) -> int:
        if dimension == COMPONENT_GREEN:
            return (self.min_green + self.max_green) // 2
        if dimension == COMPONENT_BLUE:
            return (self.min_blue + self.max_blue) // 2
        return (self.min_red + self.max_red) // 2

    def find_split_point(self) -> int:
        """Sort the box along its longest dimension and return the dividing index.

        The returned index is the first color of the upper half, clamped so
        that both halves keep at least one color.
        """
        dimension = self.longest_color_dimension
        colors = self._quantizer.colors
        lower, upper = self.lower_index, self.upper_index

        # Alpha is masked off so the chosen channel is the most significant byte
        colors[lower : upper + 1] = sorted(
            colors[lower : upper + 1],
            key=lambda c: _modify_significant_octet(c, dimension) & 0x00FFFFFF,
        )

        midpoint = self.mid_point(dimension)
        channel = _CHANNEL_GETTERS[dimension]

        split_point = lower
        for i in range(lower, upper + 1):
            if channel(colors[i]) >= midpoint:
                split_point = i
                break

        return min(max(split_point, lower + 1), upper)

    def split_box(self) -> "VBox":
        """Split this box in two.

        This box shrinks to the lower half and the upper half is returned
        as a new box.
        """
        if not self.can_split:
            raise ValueError("Can not split a box with only 1 color")

        split_point = self.find_split_point()
        new_box = VBox(self._quantizer, split_point, self.upper_index)

        self.upper_index = split_point - 1
        self.fit_box()

        return new_box

    @property
    def average_color(self) -> Swatch:
        """Population-weighted average color of the box."""
        populations = self._quantizer.color_populations
        red_sum = green_sum = blue_sum = 0
        total_population = 0

        for color in self._quantizer.colors[self.lower_index : self.upper_index + 1]:
            population = populations.get(color, 0)
            total_population += population
            red_sum += population * red(color)
            green_sum += population * green(color)
            blue_sum += population * blue(color)

        if total_population == 0:
            return Swatch(0, 0, 0, 0)

        return Swatch(
            round_half_away(red_sum / total_population),
            round_half_away(green_sum / total_population),
            round_half_away(blue_sum / total_population),
            total_population,
        )

    def __repr__(self) -> str:
        return (
            f"VBox([{self.lower_index}, {self.upper_index}], "
            f"colors={self.color_count}, volume={self.volume})"
        )


def _larger_volume(left: VBox, right: VBox) -> bool:
    return left.volume > right.volume


class ColorCutQuantizer:
    """Reduce a color histogram to at most ``max_colors`` representative swatches.

    Uses median cut: the box with the largest volume in RGB space is split
    along its longest channel until ``max_colors`` boxes exist or no box can
    be split any further.
    """

    def __init__(self, histogram: ColorHistogram, max_colors: int = DEFAULT_MAX_COLORS):
        """Quantize the histogram.

        Args:
            histogram: Histogram of the source pixels
            max_colors: Maximum number of swatches to produce
        """
        if max_colors < 1:
            raise ValueError(f"max_colors must be at least 1, got {max_colors}")

        self.max_colors = max_colors

        self.color_populations: Dict[int, int] = histogram.as_dict()

        self.colors: List[int] = [
            color for color in histogram.colors if not should_ignore_color(color)
        ]
        self.colors.sort()

        valid_color_count = len(self.colors)
        logger.debug(
            f"{valid_color_count} of {histogram.num_colors} colors kept after filtering"
        )

        if valid_color_count <= max_colors:
            self._quantized_colors = [
                Swatch.from_rgb(color, self.color_populations[color])
                for color in self.colors
            ]
        else:
            self._quantized_colors = self._quantize_pixels(valid_color_count - 1, max_colors)

        logger.debug(f"Quantized to {len(self._quantized_colors)} swatches")

    @classmethod
    def from_pixels(
        cls, pixels: PixelInput, max_colors: int = DEFAULT_MAX_COLORS
    ) -> "ColorCutQuantizer":
        """Build a histogram from packed pixels and quantize it."""
        return cls(ColorHistogram(pixels), max_colors)

    @property
    def quantized_colors(self) -> List[Swatch]:
        return list(self._quantized_colors)

    def _quantize_pixels(self, max_color_index: int, max_colors: int) -> List[Swatch]:
        queue: PriorityQueue[VBox] = PriorityQueue(_larger_volume)
        queue.offer(VBox(self, 0, max_color_index))

        self._split_boxes(queue, max_colors)

        return self._generate_average_colors(queue.data)

    def _split_boxes(self, queue: PriorityQueue[VBox], max_size: int) -> None:
        while len(queue) < max_size:
            vbox = queue.poll()
            if vbox is None:
                return

            if not vbox.can_split:
                # Nothing left to split, keep the box so its colors survive
                queue.offer(vbox)
                return

            queue.offer(vbox.split_box())
            queue.offer(vbox)

        logger.debug(f"Median cut produced {len(queue)} boxes")

    def _generate_average_colors(self, vboxes: List[VBox]) -> List[Swatch]:
        swatches = []
        for vbox in vboxes:
            swatch = vbox.average_color
            if not should_ignore_color(swatch.rgb):
                swatches.append(swatch)
        return swatches
