"""Color histogram over packed ARGB pixels."""

from typing import Dict, Iterable, Iterator, List, Tuple, Union

import numpy as np

from ..utils.logging import get_logger

logger = get_logger(__name__)

PixelInput = Union[np.ndarray, Iterable[int]]

MAX_PACKED_COLOR = 0xFFFFFFFF


class ColorHistogram:
    """Collapse a pixel sequence into (distinct color, population) pairs.

    Colors are stored in ascending packed order with one count per color.
    """

    def __init__(self, pixels: PixelInput):
        """Count pixel frequencies.

        Args:
            pixels: Packed ARGB pixels, any iterable of ints or a numpy array

        Raises:
            ValueError: If a pixel is not an integer in the unsigned 32-bit range
        """
        if isinstance(pixels, np.ndarray):
            values = pixels.ravel()
            if values.size:
                if values.dtype.kind not in "iu":
                    raise ValueError(f"Pixels must be integers, got dtype {values.dtype}")
                out_of_range = int(values.min()) < 0 or int(values.max()) > MAX_PACKED_COLOR
            else:
                out_of_range = False
        else:
            values = [int(p) for p in pixels]
            out_of_range = any(not 0 <= p <= MAX_PACKED_COLOR for p in values)

        if out_of_range:
            raise ValueError("Pixels must be packed ARGB values between 0 and 0xFFFFFFFF")

        data = np.asarray(values, dtype=np.uint32).ravel()

        if data.size == 0:
            self._colors: List[int] = []
            self._counts: List[int] = []
        else:
            colors, counts = np.unique(data, return_counts=True)
            self._colors = [int(c) for c in colors]
            self._counts = [int(n) for n in counts]

        self._total = int(data.size)
        logger.debug(
            f"Histogram of {self._total} pixels has {len(self._colors)} distinct colors"
        )

    @property
    def num_colors(self) -> int:
        return len(self._colors)

    @property
    def colors(self) -> List[int]:
        return list(self._colors)

    @property
    def color_counts(self) -> List[int]:
        return list(self._counts)

    @property
    def total_pixels(self) -> int:
        return self._total

    def items(self) -> Iterator[Tuple[int, int]]:
        """Iterate over ``(color, count)`` pairs."""
        return zip(self._colors, self._counts)

    def as_dict(self) -> Dict[int, int]:
        return dict(zip(self._colors, self._counts))

    def __len__(self) -> int:
        return len(self._colors)
