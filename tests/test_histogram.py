"""Tests for ColorHistogram."""

import random

import numpy as np
import pytest

from swatchcut.core.histogram import ColorHistogram
from swatchcut.utils.color import pack_rgb


class TestColorHistogram:
    """Frequency counting of packed pixels."""

    @pytest.fixture
    def pixels(self):
        rng = random.Random(1234)
        palette = [pack_rgb(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(40)]
        return [rng.choice(palette) for _ in range(5000)]

    def test_counts_sum_to_pixel_count(self, pixels):
        histogram = ColorHistogram(pixels)

        assert sum(histogram.color_counts) == len(pixels)
        assert histogram.total_pixels == len(pixels)

    def test_one_entry_per_distinct_color(self, pixels):
        histogram = ColorHistogram(pixels)

        assert histogram.num_colors == len(set(pixels))
        assert len(histogram.colors) == histogram.num_colors
        assert len(set(histogram.colors)) == histogram.num_colors

    def test_exact_counts(self):
        a, b, c = pack_rgb(10, 20, 30), pack_rgb(0, 0, 255), pack_rgb(255, 0, 0)
        histogram = ColorHistogram([a, b, a, c, a, b])

        assert histogram.as_dict() == {a: 3, b: 2, c: 1}
        assert histogram.colors == sorted([a, b, c])
        assert list(histogram.items()) == list(zip(histogram.colors, histogram.color_counts))

    def test_accepts_numpy_arrays(self):
        pixels = np.array([[0xFF0000FF, 0xFF0000FF], [0xFFFF0000, 0xFF0000FF]], dtype=np.uint32)
        histogram = ColorHistogram(pixels)

        assert histogram.as_dict() == {0xFF0000FF: 3, 0xFFFF0000: 1}
        assert all(isinstance(color, int) for color in histogram.colors)

    @pytest.mark.parametrize(
        "pixels",
        [
            [-16777216],
            [0x1FFFFFFFF],
            np.array([-16777216], dtype=np.int64),
            np.array([0x100000000], dtype=np.int64),
            np.array([0.5]),
        ],
    )
    def test_rejects_values_outside_packed_range(self, pixels):
        with pytest.raises(ValueError):
            ColorHistogram(pixels)

    def test_accepts_int64_arrays_in_range(self):
        histogram = ColorHistogram(np.array([0xFF0000FF, 0xFF0000FF], dtype=np.int64))

        assert histogram.as_dict() == {0xFF0000FF: 2}

    def test_empty_input(self):
        histogram = ColorHistogram([])

        assert histogram.num_colors == 0
        assert histogram.colors == []
        assert histogram.color_counts == []
        assert histogram.total_pixels == 0
        assert len(histogram) == 0
