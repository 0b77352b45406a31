"""
Core utilities and configuration for cityprefs.

This package provides core functionality including logging configuration,
the patch engine, database setup, and other shared utilities.
"""

from cityprefs.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
