"""
bootstrap/config.py - Configuration

Per-record-type options, plus process-level configuration loaded from
environment variables, JSON files, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger(__name__)


# Current and historical spellings of the computed-field assignment switch
ALLOW_SETTING_OPTION = "allow_setting_computed_fields"
ALLOW_UPDATING_OPTION = "allow_updating_computed_fields"


@dataclass(frozen=True)
class RecordOptions:
    """Options fixed when a record type is defined."""

    # When False, create/update reject assignments to computed fields
    allow_setting_computed_fields: bool = False

    @classmethod
    def from_kwargs(cls, **options: Any) -> "RecordOptions":
        """
        Build options from keyword arguments.

        Accepts ``allow_setting_computed_fields`` and its historical name
        ``allow_updating_computed_fields``.

        Raises:
            TypeError: Unknown option, or both names given with different values
        """
        unknown = sorted(set(options) - {ALLOW_SETTING_OPTION, ALLOW_UPDATING_OPTION})
        if unknown:
            raise TypeError(f"Unknown record type options: {', '.join(unknown)}")

        setting = options.get(ALLOW_SETTING_OPTION)
        updating = options.get(ALLOW_UPDATING_OPTION)
        if setting is not None and updating is not None and bool(setting) != bool(updating):
            raise TypeError(
                f"Conflicting values for {ALLOW_SETTING_OPTION} and {ALLOW_UPDATING_OPTION}"
            )

        if setting is None:
            setting = updating
        return cls(allow_setting_computed_fields=bool(setting))

    def to_dict(self) -> Dict[str, Any]:
        return {ALLOW_SETTING_OPTION: self.allow_setting_computed_fields}


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("REACTIVE_LOG_LEVEL", "INFO"),
            format=os.getenv("REACTIVE_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("REACTIVE_LOG_FILE"),
            json_logs=os.getenv("REACTIVE_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class ReactiveConfig:
    """Root configuration."""

    environment: str = "development"
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "ReactiveConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("REACTIVE_ENVIRONMENT", "development"),
            debug=os.getenv("REACTIVE_DEBUG", "false").lower() == "true",
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "ReactiveConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ReactiveConfig":
        """Environment values, overridden by file values."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


_config: Optional[ReactiveConfig] = None


def load_config(filepath: Optional[str] = None) -> ReactiveConfig:
    """Load configuration from file (if given) or environment."""
    global _config
    _config = ReactiveConfig.from_file(filepath) if filepath else ReactiveConfig.from_env()
    return _config


def get_config() -> ReactiveConfig:
    """Get the loaded configuration, loading from environment on first use."""
    if _config is None:
        return load_config()
    return _config
