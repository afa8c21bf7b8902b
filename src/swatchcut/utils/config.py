"""Configuration management for swatchcut."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..core.generator import RoleTargets, ScoringWeights
from .logging import get_logger

logger = get_logger(__name__)


class PaletteConfig(BaseModel):
    """Validated settings consumed by the palette builder."""

    max_colors: int = Field(default=16, ge=1)
    resize_max_dimension: int = Field(default=192, ge=1)
    targets: RoleTargets = Field(default_factory=RoleTargets)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)


class ConfigManager:
    """Manage configuration settings for swatchcut."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path) if config_path else None
        self._config = self.get_default_config()

        if self.config_path and self.config_path.exists():
            self.load_config()

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "quantizer": {
                "max_colors": 16,
            },
            "image": {
                "resize_max_dimension": 192,
            },
            "scoring": {
                "weights": ScoringWeights().model_dump(),
                "targets": RoleTargets().model_dump(),
            },
            "logging": {
                "level": "INFO",
                "file": None,
            },
        }

    def load_config(self) -> None:
        """Load configuration from file."""
        if not self.config_path or not self.config_path.exists():
            return

        try:
            with open(self.config_path, "r") as f:
                if self.config_path.suffix.lower() in (".yaml", ".yml"):
                    loaded_config = yaml.safe_load(f) or {}
                else:
                    loaded_config = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(
                f"Failed to load configuration from {self.config_path}: {e}"
            ) from e

        if not isinstance(loaded_config, dict):
            raise ValueError(
                f"Configuration in {self.config_path} must be a mapping"
            )

        self._config = self._deep_merge(self._config, loaded_config)
        logger.debug(f"Loaded configuration from {self.config_path}")

    def save_config(self, output_path: Optional[Union[str, Path]] = None) -> None:
        """Save current configuration to file.

        Args:
            output_path: Optional output path, defaults to current config_path
        """
        save_path = Path(output_path) if output_path else self.config_path

        if not save_path:
            raise ValueError("No output path specified")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            if save_path.suffix.lower() in (".yaml", ".yml"):
                yaml.dump(self._config, f, default_flow_style=False, indent=2)
            else:
                json.dump(self._config, f, indent=2)

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration."""
        return self._config.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self._config

        try:
            for k in key.split("."):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def update(self, updates: Dict[str, Any]) -> None:
        """Update configuration with dictionary of changes.

        Args:
            updates: Dictionary of configuration updates
        """
        self._config = self._deep_merge(self._config, updates)

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get_palette_config(self) -> PaletteConfig:
        """Build the validated palette configuration.

        Raises:
            ValueError: If the current settings do not validate
        """
        scoring = self.get("scoring", {}) or {}
        try:
            return PaletteConfig(
                max_colors=self.get("quantizer.max_colors", 16),
                resize_max_dimension=self.get("image.resize_max_dimension", 192),
                targets=RoleTargets(**(scoring.get("targets") or {})),
                weights=ScoringWeights(**(scoring.get("weights") or {})),
            )
        except ValidationError as e:
            raise ValueError(f"Invalid palette configuration: {e}") from e

    @classmethod
    def from_env(cls, config_path: Optional[Union[str, Path]] = None) -> "ConfigManager":
        """Create configuration manager with environment variable overrides."""
        config_manager = cls(config_path)

        env_mappings = {
            "SWATCHCUT_MAX_COLORS": "quantizer.max_colors",
            "SWATCHCUT_RESIZE_MAX_DIMENSION": "image.resize_max_dimension",
            "SWATCHCUT_LOG_LEVEL": "logging.level",
            "SWATCHCUT_LOG_FILE": "logging.file",
        }

        for env_var, config_key in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                if value.isdigit():
                    value = int(value)
                config_manager.set(config_key, value)

        return config_manager

    def validate_config(self) -> Tuple[bool, List[str]]:
        """Validate current configuration.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        max_colors = self.get("quantizer.max_colors", 0)
        if not isinstance(max_colors, int) or max_colors < 1:
            errors.append("quantizer.max_colors must be a positive integer")

        dimension = self.get("image.resize_max_dimension", 0)
        if not isinstance(dimension, int) or dimension < 1:
            errors.append("image.resize_max_dimension must be a positive integer")

        weights = self.get("scoring.weights", {}) or {}
        for weight_name, weight_value in weights.items():
            if not isinstance(weight_value, (int, float)) or weight_value < 0:
                errors.append(f"scoring.weights.{weight_name} must be non-negative number")

        level = self.get("logging.level", "INFO")
        if str(level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"logging.level must be a standard level name, got {level}")

        if not errors:
            try:
                self.get_palette_config()
            except ValueError as e:
                errors.append(str(e))

        return len(errors) == 0, errors
