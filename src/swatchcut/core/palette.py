"""Palette result and the builder that produces it."""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

from ..utils.logging import PerformanceLogger, get_logger
from .generator import PaletteGenerator, Role, RoleTargets, ScoringWeights
from .histogram import PixelInput
from .quantizer import DEFAULT_MAX_COLORS, ColorCutQuantizer
from .swatch import Swatch

if TYPE_CHECKING:
    from PIL import Image

    from ..utils.config import PaletteConfig

logger = get_logger(__name__)

DEFAULT_RESIZE_BITMAP_MAX_DIMENSION = 192


class Palette:
    """Swatches extracted from an image plus the six role assignments.

    Any role may be None when no swatch qualified and none could be
    synthesized.
    """

    def __init__(
        self,
        swatches: Sequence[Swatch],
        roles: Optional[Mapping[Role, Optional[Swatch]]] = None,
        scores: Optional[Mapping[Role, float]] = None,
    ):
        self._swatches = tuple(swatches)
        self._roles = {role: None for role in Role}
        if roles:
            self._roles.update(roles)
        self._scores = dict(scores or {})

    @property
    def swatches(self) -> List[Swatch]:
        return list(self._swatches)

    @property
    def roles(self) -> Dict[Role, Optional[Swatch]]:
        return dict(self._roles)

    @property
    def scores(self) -> Dict[Role, float]:
        """Selection score of each role picked from the swatch list."""
        return dict(self._scores)

    def get_swatch(self, role: Union[Role, str]) -> Optional[Swatch]:
        return self._roles[Role(role)]

    @property
    def vibrant_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.VIBRANT]

    @property
    def light_vibrant_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.LIGHT_VIBRANT]

    @property
    def dark_vibrant_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.DARK_VIBRANT]

    @property
    def muted_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.MUTED]

    @property
    def light_muted_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.LIGHT_MUTED]

    @property
    def dark_muted_swatch(self) -> Optional[Swatch]:
        return self._roles[Role.DARK_MUTED]

    def get_color(self, role: Union[Role, str], default_color: int) -> int:
        """Packed RGB of a role, or ``default_color`` when the role is unset."""
        swatch = self.get_swatch(role)
        return swatch.rgb if swatch is not None else default_color

    def get_vibrant_color(self, default_color: int) -> int:
        return self.get_color(Role.VIBRANT, default_color)

    def get_light_vibrant_color(self, default_color: int) -> int:
        return self.get_color(Role.LIGHT_VIBRANT, default_color)

    def get_dark_vibrant_color(self, default_color: int) -> int:
        return self.get_color(Role.DARK_VIBRANT, default_color)

    def get_muted_color(self, default_color: int) -> int:
        return self.get_color(Role.MUTED, default_color)

    def get_light_muted_color(self, default_color: int) -> int:
        return self.get_color(Role.LIGHT_MUTED, default_color)

    def get_dark_muted_color(self, default_color: int) -> int:
        return self.get_color(Role.DARK_MUTED, default_color)

    def to_dict(self, include_text_colors: bool = True) -> Dict[str, Any]:
        """JSON-serializable view of the palette."""
        return {
            "roles": {
                role.value: (
                    swatch.to_dict(include_text_colors) if swatch is not None else None
                )
                for role, swatch in self._roles.items()
            },
            "swatches": [swatch.to_dict() for swatch in self._swatches],
        }

    def __len__(self) -> int:
        return len(self._swatches)

    def __repr__(self) -> str:
        assigned = sum(1 for swatch in self._roles.values() if swatch is not None)
        return f"Palette(swatches={len(self._swatches)}, roles={assigned}/{len(Role)})"


class PaletteBuilder:
    """Build a :class:`Palette` from pixels, an image or existing swatches.

    Example:
        palette = PaletteBuilder.from_image("cover.jpg").max_colors(24).generate()
    """

    def __init__(
        self,
        pixels: Optional[PixelInput] = None,
        swatches: Optional[Sequence[Swatch]] = None,
        image: Optional[Union[str, Path, "Image.Image"]] = None,
        config: Optional["PaletteConfig"] = None,
    ):
        sources = [s for s in (pixels, swatches, image) if s is not None]
        if len(sources) != 1:
            raise ValueError("Exactly one of pixels, swatches or image must be given")

        self._pixels = pixels
        self._swatches = list(swatches) if swatches is not None else None
        self._image = image

        self._max_colors = DEFAULT_MAX_COLORS
        self._resize_max_dimension = DEFAULT_RESIZE_BITMAP_MAX_DIMENSION
        self._targets: Optional[RoleTargets] = None
        self._weights: Optional[ScoringWeights] = None

        if config is not None:
            self.max_colors(config.max_colors)
            self.resize_max_dimension(config.resize_max_dimension)
            self.targets(config.targets)
            self.weights(config.weights)

        self._perf = PerformanceLogger()

    @classmethod
    def from_pixels(cls, pixels: PixelInput, config: Optional["PaletteConfig"] = None) -> "PaletteBuilder":
        return cls(pixels=pixels, config=config)

    @classmethod
    def from_swatches(cls, swatches: Sequence[Swatch], config: Optional["PaletteConfig"] = None) -> "PaletteBuilder":
        return cls(swatches=swatches, config=config)

    @classmethod
    def from_image(
        cls, image: Union[str, Path, "Image.Image"], config: Optional["PaletteConfig"] = None
    ) -> "PaletteBuilder":
        return cls(image=image, config=config)

    def max_colors(self, max_colors: int) -> "PaletteBuilder":
        if max_colors < 1:
            raise ValueError(f"max_colors must be at least 1, got {max_colors}")
        self._max_colors = max_colors
        return self

    def resize_max_dimension(self, dimension: int) -> "PaletteBuilder":
        if dimension < 1:
            raise ValueError(f"resize_max_dimension must be at least 1, got {dimension}")
        self._resize_max_dimension = dimension
        return self

    def targets(self, targets: RoleTargets) -> "PaletteBuilder":
        self._targets = targets
        return self

    def weights(self, weights: ScoringWeights) -> "PaletteBuilder":
        self._weights = weights
        return self

    def _quantize(self, pixels: PixelInput) -> List[Swatch]:
        self._perf.start_timer("quantize")
        quantizer = ColorCutQuantizer.from_pixels(pixels, self._max_colors)
        self._perf.end_timer("quantize")
        return quantizer.quantized_colors

    def generate(self) -> Palette:
        """Quantize (when needed) and select role swatches."""
        if self._swatches is not None:
            swatches = self._swatches
        elif self._image is not None:
            from ..image.processor import ImageProcessor

            processor = ImageProcessor(self._resize_max_dimension)
            swatches = self._quantize(processor.prepare_pixels(self._image))
        else:
            swatches = self._quantize(self._pixels)

        generator = PaletteGenerator(self._targets, self._weights)
        self._perf.start_timer("generate")
        roles = generator.generate(swatches)
        self._perf.end_timer("generate")

        palette = Palette(swatches, roles, generator.scores)
        logger.debug(f"Generated {palette!r}")
        return palette


def generate_palette(
    pixels: PixelInput,
    max_colors: int = DEFAULT_MAX_COLORS,
    config: Optional["PaletteConfig"] = None,
) -> Palette:
    """Quantize packed ARGB pixels and build a palette in one call.

    An explicit ``config`` takes precedence over ``max_colors``.
    """
    builder = PaletteBuilder.from_pixels(pixels, config=config)
    if config is None:
        builder.max_colors(max_colors)
    return builder.generate()
