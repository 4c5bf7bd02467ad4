"""
Configuration manager for the navigation core.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, Optional

from .math.constants import LOW_PASS_ALPHA, ALPHA_ORIENTATION_SENSORS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Config:
    """Configuration manager for the navigation core."""

    DEFAULT_CONFIG = {
        # Orientation sensors
        "sensors": {
            "enabled": True,
            # auto, raw or calculated
            "orientation_mode": "auto"
        },

        # Filter coefficients
        "filters": {
            "low_pass_alpha": LOW_PASS_ALPHA,
            "orientation_alpha": ALPHA_ORIENTATION_SENSORS
        },

        # Logging
        "logging": {
            "level": "INFO",
            "file": None
        }
    }

    def __init__(self, config_file: Optional[str] = "getback.json"):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file, None to use defaults only
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file is None:
            return

        # Load configuration from file if it exists
        if os.path.exists(config_file):
            self.load_config()
        else:
            logger.info("Config file %s not found, using defaults", config_file)

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_file, 'r') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load config %s: %s", self.config_file, e)
            return False

        if not isinstance(file_config, dict):
            logger.warning("Ignoring config %s: top level is not an object", self.config_file)
            return False

        # Merge with defaults (file config overrides defaults)
        self._merge_config(self.config, file_config)

        logger.info("Configuration loaded from %s", self.config_file)
        return True

    def save_config(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully
        """
        if self.config_file is None:
            return False

        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            logger.warning("Failed to save config %s: %s", self.config_file, e)
            return False

        logger.info("Configuration saved to %s", self.config_file)
        return True

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default=None):
        """Get configuration value with optional default."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set configuration value."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    # Property accessors for common configuration values
    @property
    def sensors_enabled(self) -> bool:
        return bool(self.get("sensors.enabled", True))

    @property
    def orientation_mode(self) -> str:
        return self.get("sensors.orientation_mode", "auto")

    @property
    def low_pass_alpha(self) -> float:
        return float(self.get("filters.low_pass_alpha", LOW_PASS_ALPHA))

    @property
    def orientation_alpha(self) -> float:
        return float(self.get("filters.orientation_alpha", ALPHA_ORIENTATION_SENSORS))

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logging.file")


def setup_logging(config: Config):
    """
    Configure the root logger from the logging section of config.

    Args:
        config: Configuration to read the level and optional log file from
    """
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
