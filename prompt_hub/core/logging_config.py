"""
Logging Configuration Module.

This module provides centralized logging configuration for prompt-hub. Library
code only ever obtains module loggers via ``logging.getLogger(__name__)``;
applications that want prompt-hub's formatting call :func:`setup_logging`
once during startup.

Features:
- Configurable log levels per module
- Console and optional file logging
- Simple, detailed and JSON-like formats
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

# Define log formats
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

# Module-specific log levels
MODULE_LOG_LEVELS = {
    "prompt_hub.prompt": "INFO",
    "prompt_hub.prompt.source": "INFO",
    "prompt_hub.prompt.refresh": "INFO",
    # Third-party libraries (reduce noise)
    "httpx": "WARNING",
    "httpcore": "WARNING",
}


def _default_log_level() -> str:
    """Read the default log level from the settings model.

    The settings import is deferred to avoid circular imports during module
    initialization.
    """
    from prompt_hub.core.config import Settings

    try:
        return Settings().log_level
    except ValidationError:
        # Fallback to the raw environment variable if other settings are invalid
        return os.getenv("PROMPT_HUB_LOG_LEVEL", "INFO")


def _resolve_format(log_format: str) -> str:
    if log_format == "json":
        return JSON_FORMAT
    if log_format == "simple":
        return SIMPLE_FORMAT
    return DETAILED_FORMAT


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure logging for an application using prompt-hub.

    Args:
        log_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``Settings.log_level`` (``PROMPT_HUB_LOG_LEVEL``).
        log_format: One of ``simple``, ``detailed`` or ``json``. Defaults to
            ``PROMPT_HUB_LOG_FORMAT`` or ``detailed``.
        log_file: Optional file that additionally receives DEBUG output.
    """
    level = (log_level or _default_log_level()).upper()
    fmt = log_format or os.getenv("PROMPT_HUB_LOG_FORMAT", "detailed")

    formatter = logging.Formatter(_resolve_format(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info("Logging configured: level=%s, format=%s, file_logging=%s", level, fmt, log_file is not None)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
