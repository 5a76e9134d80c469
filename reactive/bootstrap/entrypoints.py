"""
bootstrap/entrypoints.py - Entry points

Logging setup and the ``reactive-diagram`` command, which prints the
MermaidJS diagram of a record type given as ``package.module:attribute``.
"""

from __future__ import annotations
from typing import Optional
import argparse
import importlib
import json
import logging
import sys

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
        log_format: Format string for plain-text logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(log_format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)


def load_record_type(target: str):
    """
    Import ``package.module:attribute`` and return the RecordType it names.

    Raises:
        ValueError: Malformed target
        ImportError: Module cannot be imported
        AttributeError: Attribute does not exist
        TypeError: Attribute is not a RecordType
    """
    from ..core import RecordType

    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Expected 'package.module:attribute', got {target!r}")

    obj = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)

    if not isinstance(obj, RecordType):
        raise TypeError(f"{target} is a {type(obj).__name__}, not a RecordType")
    return obj


def diagram_main(args: list = None) -> int:
    """
    Diagram CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    from ..errors import ReactiveError
    from .config import get_config

    config = get_config()

    parser = argparse.ArgumentParser(
        description="Print the MermaidJS dependency diagram of a record type",
        prog="reactive-diagram",
    )
    parser.add_argument(
        "target",
        help="Record type as package.module:attribute",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.logging.level.upper(),
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=config.logging.log_file,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output graph structure as JSON instead of a diagram",
    )

    parsed = parser.parse_args(args)

    log_level = "DEBUG" if parsed.verbose or config.debug else parsed.log_level
    setup_logging(
        level=log_level,
        log_file=parsed.log_file,
        json_format=config.logging.json_logs,
        log_format=config.logging.format,
    )

    try:
        record_type = load_record_type(parsed.target)
        if parsed.json:
            output = json.dumps(record_type.freeze().to_dict(), indent=2)
        else:
            output = record_type.mermaid()
    except (ReactiveError, ValueError, ImportError, AttributeError, TypeError) as e:
        logger.error(f"Cannot load {parsed.target}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(diagram_main())
