"""
Configuration module for the location format engine.

Loads configuration from an optional JSON file and environment variables.
"""

import json
import logging
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the command line application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses the
                        LOCATION_FORMAT_CONFIG env var or defaults to
                        'location_format.json' (which may be missing)
        """
        self.explicit = config_file is not None or bool(os.getenv("LOCATION_FORMAT_CONFIG"))
        self.config_file = (
            config_file
            or os.getenv("LOCATION_FORMAT_CONFIG")
            or constants.DEFAULT_CONFIG_FILE
        )
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self.explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("LOCATION_FORMAT_PATTERN"):
            self.config.setdefault("format", {})
            self.config["format"]["pattern"] = os.getenv("LOCATION_FORMAT_PATTERN")

        if os.getenv("LOCATION_FORMAT_LOG_LEVEL"):
            self.config.setdefault("logging", {})
            self.config["logging"]["level"] = os.getenv("LOCATION_FORMAT_LOG_LEVEL")

        if os.getenv("LOCATION_FORMAT_LOG_FILE"):
            self.config.setdefault("logging", {})
            self.config["logging"]["file"] = os.getenv("LOCATION_FORMAT_LOG_FILE")

    def _validate_config(self) -> None:
        """Validate the configured values."""
        # Imported here, the formatter module depends on core
        from ..exceptions import LocationException
        from ..formatter import resolve_formatter

        level = self.log_level
        if not isinstance(logging.getLevelName(level.upper()), int):
            raise ValueError(f"Invalid logging level: {level}")

        try:
            resolve_formatter(self.default_pattern)
        except LocationException as e:
            raise ValueError(f"Invalid default pattern '{self.default_pattern}': {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'format.pattern')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def default_pattern(self) -> str:
        """Get the pattern (or canned formatter name) used when none is given."""
        return self.get("format.pattern", constants.DEFAULT_PATTERN)

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.get("logging.level", constants.DEFAULT_LOG_LEVEL)

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, None for console only logging."""
        return self.get("logging.file")

    def __str__(self) -> str:
        return (
            f"Config(file={self.config_file}, pattern={self.default_pattern!r}, "
            f"log_level={self.log_level})"
        )
