"""
Configuration management.

Single source of truth for application settings: the default design
parameters offered by the CLI, export settings and logging level.
Stored as YAML in the user's home directory.
"""

import os
from pathlib import Path
from typing import Optional, Any
from dataclasses import dataclass, field, asdict
import yaml
import logging

from shunt_range_designer.core.exceptions import ConfigurationError
from shunt_range_designer.core.models import GlobalConfig
from shunt_range_designer.utils.constants import (
    APP_VERSION,
    DEFAULT_NUM_RANGES,
    DEFAULT_ADC_BITS,
    DEFAULT_ADC_RESOLUTION,
    DEFAULT_BUS_VOLTAGE,
    DEFAULT_MAX_CURRENT,
    DEFAULT_MIN_CURRENT_NANOAMP,
    DEFAULT_HYSTERESIS_FACTOR,
    DEFAULT_TOLERANCE_PERCENT,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".shunt_range_designer" / "config.yaml"


@dataclass
class DesignDefaults:
    """Default global parameters for new designs."""
    num_ranges: int = DEFAULT_NUM_RANGES
    adc_bits: int = DEFAULT_ADC_BITS
    adc_resolution_volt_per_lsb: float = DEFAULT_ADC_RESOLUTION
    bus_voltage: float = DEFAULT_BUS_VOLTAGE
    max_current_target: float = DEFAULT_MAX_CURRENT
    min_current_target_nanoamp: float = DEFAULT_MIN_CURRENT_NANOAMP
    hysteresis_factor: float = DEFAULT_HYSTERESIS_FACTOR
    tolerance_percent: float = DEFAULT_TOLERANCE_PERCENT

    def to_global_config(self, **overrides: Any) -> GlobalConfig:
        """Build a validated GlobalConfig, ignoring None overrides."""
        values = asdict(self)
        values.pop("tolerance_percent")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GlobalConfig(**values)


@dataclass
class ExportSettings:
    """Export configuration."""
    output_directory: Path = field(default_factory=lambda: Path.cwd())
    indent: int = 2

    def ensure_directory(self) -> Path:
        """Ensure export directory exists."""
        self.output_directory.mkdir(parents=True, exist_ok=True)
        return self.output_directory


@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class Config:
    """Main configuration container."""
    design: DesignDefaults = field(default_factory=DesignDefaults)
    export: ExportSettings = field(default_factory=ExportSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # Version info
    version: str = APP_VERSION

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from YAML file.

        Falls back to defaults if the file doesn't exist or can't be read.
        """
        config = cls()
        config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

        if not config_path.exists():
            return config

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return config

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_path}: expected a mapping")
            return config

        for name in ("design", "export", "logging"):
            section = data.get(name)
            if section is None:
                continue
            if not isinstance(section, dict):
                logger.warning(f"Ignoring '{name}' section in {config_path}: expected a mapping")
                continue

            target = getattr(config, name)
            for key, value in section.items():
                if hasattr(target, key):
                    if name == "export" and key == "output_directory":
                        value = Path(os.path.expandvars(str(value))).expanduser()
                    setattr(target, key, value)

        logger.info(f"Loaded config from {config_path}")
        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to YAML file."""
        config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "design": asdict(self.design),
            "export": {
                "output_directory": str(self.export.output_directory),
                "indent": self.export.indent,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

        logger.info(f"Saved config to {config_path}")

    def validate(self) -> None:
        """
        Check that the design defaults form a valid GlobalConfig.

        Raises:
            ConfigurationError: If a default is out of range
        """
        try:
            self.design.to_global_config()
        except ValueError as e:
            raise ConfigurationError(f"Invalid design defaults: {e}") from e


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reload_config(config_path: Optional[Path] = None) -> Config:
    """Reload configuration from file."""
    global _config
    _config = Config.load(config_path)
    return _config
