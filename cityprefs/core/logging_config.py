"""
Logging Configuration Module.

This module provides centralized logging configuration for the cityprefs project.
It sets up logging with different levels for different modules.

Features:
- Configurable log levels per module
- Console and optional file logging
- Simple, detailed and JSON-like line formats
"""

import logging
from pathlib import Path
from typing import Optional

from cityprefs.server.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.log_file_enabled


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
    # Core modules
    "cityprefs.core": "INFO",
    "cityprefs.core.patching": "DEBUG",
    "cityprefs.core.database": "INFO",
    # Server modules
    "cityprefs.server": "INFO",
    "cityprefs.server.api": "DEBUG",
    "cityprefs.server.services": "DEBUG",
    # Third-party libraries (reduce noise)
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _format_string(fmt: str) -> str:
    if fmt == "json":
        return JSON_FORMAT
    if fmt == "simple":
        return SIMPLE_FORMAT
    return DETAILED_FORMAT


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: Optional[bool] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Override whether file logging is enabled
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    file_logging = ENABLE_FILE_LOGGING if enable_file is None else enable_file

    formatter = logging.Formatter(_format_string(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_logging:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(LOG_FILE_DIR) / "cityprefs.log")
        file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
