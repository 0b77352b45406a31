"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from unittest.mock import patch

import pytest

from cityprefs.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _remove_configured_handlers():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


def _console_handler() -> logging.Handler:
    return next(h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_console_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)
        assert _console_handler().level == expected_level

    @pytest.mark.parametrize(
        "log_format,expected",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT), ("unknown", DETAILED_FORMAT)],
    )
    def test_formats(self, log_format, expected):
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected

    def test_handlers_are_not_duplicated(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        stream_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1

    def test_module_levels_are_applied(self):
        setup_logging(enable_file=False)
        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_file_logging(self, tmp_path):
        with patch("cityprefs.core.logging_config.LOG_FILE_DIR", str(tmp_path / "logs")):
            setup_logging(enable_file=True)
            get_logger("cityprefs.test").warning("written to file")

        file_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.FileHandler]
        assert len(file_handlers) == 1
        file_handlers[0].flush()
        assert "written to file" in (tmp_path / "logs" / "cityprefs.log").read_text()


def test_get_logger_returns_named_logger():
    assert get_logger("cityprefs.core.patching.merge").name == "cityprefs.core.patching.merge"
