# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `rowedit.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels and log file name.
- Enables key tracing only when ``ROWEDIT_KEYTRACE`` is set.

The tests run in a temporary working directory to avoid touching real files.
"""

import logging
from typing import Generator

import pytest

from rowedit.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """`setup_logging` should add rotating file handlers with proper levels."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ROWEDIT_KEYTRACE", raising=False)

    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
                "log_file": "logs/editor.log",
            }
        }
    )

    root = logging.getLogger()
    names = {type(h).__name__ for h in root.handlers}
    assert "RotatingFileHandler" in names
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "logs" / "editor.log").exists()
    assert logging_config.KEY_LOGGER.disabled is True


def test_console_handler_is_optional(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "error"}})

    root = logging.getLogger()
    assert len(root.handlers) == 2
    console = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert console and console[0].level == logging.ERROR
    assert (tmp_path / "rowedit.log").exists()


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ROWEDIT_KEYTRACE", "yes")
    logging_config.setup_logging({})

    key_logger = logging.getLogger("rowedit.keyevents")
    assert key_logger.disabled is False
    assert key_logger.propagate is False
    assert any(type(h).__name__ == "RotatingFileHandler" for h in key_logger.handlers)

    key_logger.debug("raw=%r", 97)
    for handler in key_logger.handlers:
        handler.flush()
    assert "raw=97" in (tmp_path / "keytrace.log").read_text()

    for handler in key_logger.handlers:
        handler.close()
    key_logger.handlers = []
