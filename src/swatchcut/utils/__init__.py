"""Utility modules for swatchcut."""

from .color import to_hex
from .logging import get_logger, setup_logging
from .config import ConfigManager, PaletteConfig

__all__ = [
    "ConfigManager",
    "PaletteConfig",
    "get_logger",
    "setup_logging",
    "to_hex",
]
