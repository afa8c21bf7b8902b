"""swatchcut: median-cut color quantization and swatch role selection."""

__version__ = "0.1.0"

from .core.generator import PaletteGenerator, Role, RoleTarget, RoleTargets, ScoringWeights
from .core.histogram import ColorHistogram
from .core.palette import Palette, PaletteBuilder, generate_palette
from .core.quantizer import ColorCutQuantizer
from .core.swatch import Swatch
from .utils.config import ConfigManager, PaletteConfig

__all__ = [
    "ColorCutQuantizer",
    "ColorHistogram",
    "ConfigManager",
    "Palette",
    "PaletteBuilder",
    "PaletteConfig",
    "PaletteGenerator",
    "Role",
    "RoleTarget",
    "RoleTargets",
    "ScoringWeights",
    "Swatch",
    "generate_palette",
]
