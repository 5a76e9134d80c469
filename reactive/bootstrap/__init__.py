"""
bootstrap/ - Bootstrap Layer

Configuration loading, logging setup, and command-line entry points.
"""

from .config import (
    RecordOptions,
    ReactiveConfig,
    LoggingConfig,
    load_config,
    get_config,
)

from .entrypoints import (
    setup_logging,
    load_record_type,
    diagram_main,
)

__all__ = [
    # Config
    "RecordOptions",
    "ReactiveConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    # Entry points
    "setup_logging",
    "load_record_type",
    "diagram_main",
]
