"""Quantization and role selection engine for swatchcut."""

from .histogram import ColorHistogram
from .priority_queue import PriorityQueue
from .swatch import Swatch
from .quantizer import ColorCutQuantizer, VBox
from .generator import PaletteGenerator, Role, RoleTarget, RoleTargets, ScoringWeights
from .palette import Palette, PaletteBuilder, generate_palette

__all__ = [
    "ColorHistogram",
    "PriorityQueue",
    "Swatch",
    "ColorCutQuantizer",
    "VBox",
    "PaletteGenerator",
    "Role",
    "RoleTarget",
    "RoleTargets",
    "ScoringWeights",
    "Palette",
    "PaletteBuilder",
    "generate_palette",
]
