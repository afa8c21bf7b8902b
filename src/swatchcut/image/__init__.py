"""Image preparation for swatchcut."""

from .processor import ImageProcessor

__all__ = [
    "ImageProcessor",
]
