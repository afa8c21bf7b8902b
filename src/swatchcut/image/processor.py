"""Image loading and pixel extraction for palette generation."""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RESIZE_BITMAP_MAX_DIMENSION = 192


class ImageProcessor:
    """Prepare images for quantization: decode, scale down, pack pixels."""

    def __init__(self, target_max_dimension: int = DEFAULT_RESIZE_BITMAP_MAX_DIMENSION):
        """Initialize image processor.

        Args:
            target_max_dimension: Longest side, in pixels, images are scaled
                down to before their pixels are read
        """
        if target_max_dimension <= 0:
            raise ValueError(
                f"target_max_dimension must be positive, got {target_max_dimension}"
            )
        self.target_max_dimension = target_max_dimension

    def load_image(self, image_path: Union[str, Path]) -> Image.Image:
        """Load an image from file as RGBA.

        Args:
            image_path: Path to image file

        Returns:
            RGBA PIL image
        """
        with Image.open(image_path) as image:
            image.load()
            return image.convert("RGBA")

    def scale_bitmap_down(self, image: Image.Image) -> Image.Image:
        """Shrink ``image`` so its longest side fits the target dimension.

        Images already small enough are returned unchanged; aspect ratio is
        kept and nothing is ever upscaled.
        """
        width, height = image.size
        max_dimension = max(width, height)

        if max_dimension <= self.target_max_dimension:
            return image

        scale_ratio = self.target_max_dimension / max_dimension
        new_size = (max(1, int(width * scale_ratio)), max(1, int(height * scale_ratio)))

        logger.debug(f"Scaling image from {image.size} to {new_size}")
        return image.resize(new_size, Image.BILINEAR)

    def get_argb_pixels(self, image: Image.Image) -> np.ndarray:
        """Pack an image into a flat array of ``0xAARRGGBB`` ints.

        Args:
            image: PIL image in any mode

        Returns:
            uint32 array with one entry per pixel, row-major
        """
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32).reshape(-1, 4)

        return (
            (rgba[:, 3] << 24) | (rgba[:, 0] << 16) | (rgba[:, 1] << 8) | rgba[:, 2]
        ).astype(np.uint32)

    def prepare_pixels(self, image: Union[str, Path, Image.Image]) -> np.ndarray:
        """Load (if needed), scale down and pack an image in one step."""
        if not isinstance(image, Image.Image):
            image = self.load_image(image)

        scaled = self.scale_bitmap_down(image)
        pixels = self.get_argb_pixels(scaled)

        logger.debug(f"Prepared {pixels.size} pixels from {scaled.size[0]}x{scaled.size[1]} image")
        return pixels
