"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from routinely.config import BaseConfig
from routinely.logging_config import JSONFormatter, get_logger, setup_logging


def _record(level=logging.INFO, msg="Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """Test that JSONFormatter correctly formats log records."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    """Test that JSONFormatter correctly handles exceptions."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, "Error occurred", exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.routine_id = "3"

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"]["routine_id"] == "3"


def test_setup_logging(app_env):
    """Test that logging setup creates log files with rotation."""
    config = BaseConfig()
    config.DEV_MODE = True

    logger = setup_logging(config)

    assert logger.name == "routinely"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2  # Console + File

    log_file = app_env / "logs" / "routinely.log"
    assert log_file.exists()

    get_logger("services.checkins").warning("Test warning message")

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    assert len(lines) >= 2
    for line in lines:
        log_entry = json.loads(line)
        assert "timestamp" in log_entry
        assert "level" in log_entry
        assert "message" in log_entry
    assert json.loads(lines[-1])["logger"] == "routinely.services.checkins"


def test_setup_logging_twice_does_not_duplicate_handlers(app_env):
    config = BaseConfig()

    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """Test that get_logger returns properly namespaced loggers."""
    assert get_logger("module1").name == "routinely.module1"
    assert get_logger("routinely.services.tts").name == "routinely.services.tts"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(app_env, dev_mode):
    """Test that console logging level adjusts based on dev mode."""
    config = BaseConfig()
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
