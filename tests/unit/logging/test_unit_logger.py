# tests/unit/logging/test_unit_logger.py — v2
"""Tests for logging/logger.py: logger factory and formatters."""

from __future__ import annotations

import io
import json
import logging

import pytest

from account_summaries.config.settings import Settings
from account_summaries.logging.context import ingestion_context
from account_summaries.logging.logger import (
    ROOT_LOGGER,
    JsonFormatter,
    TextFormatter,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        with ingestion_context("build1", "summaries.json"):
            parsed = json.loads(JsonFormatter().format(_record("msg")))
        assert parsed["context"] == {"source": "summaries.json", "build_id": "build1"}

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record("msg", data={"skipped": 2})))
        assert parsed["data"] == {"skipped": 2}


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        with ingestion_context("build1", "file.json"):
            output = TextFormatter().format(_record("x"))
        assert "[build1]" in output
        assert "(file.json)" in output


class TestSetupLogging:
    def test_setup_json(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level="DEBUG", log_format="json", stream=stream)
        root = logging.getLogger(ROOT_LOGGER)
        assert root.level == logging.DEBUG
        logging.getLogger("account_summaries.index.builder").debug("built")
        assert json.loads(stream.getvalue().splitlines()[-1])["message"] == "built"

    def test_setup_text(self, restore_root_logger):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger(ROOT_LOGGER)
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_no_duplicate_handlers(self, restore_root_logger):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_file_handler(self, restore_root_logger, tmp_path):
        setup_logging(log_file=str(tmp_path / "logs" / "app.log"))
        root = logging.getLogger(ROOT_LOGGER)
        assert len(root.handlers) == 2
        for handler in root.handlers:
            handler.close()


class TestSetupLoggingFromSettings:
    def test_applies_settings(self, restore_root_logger):
        setup_logging_from_settings(Settings(_env_file=None, log_level="WARNING", log_format="text"))
        root = logging.getLogger(ROOT_LOGGER)
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_verbose_forces_debug(self, restore_root_logger):
        setup_logging_from_settings(Settings(_env_file=None, log_level="ERROR"), verbose=True)
        assert logging.getLogger(ROOT_LOGGER).level == logging.DEBUG

    def test_log_file_from_settings(self, restore_root_logger, tmp_path):
        settings = Settings(_env_file=None, log_file=tmp_path / "app.log", log_rotation="1MB")
        setup_logging_from_settings(settings)
        root = logging.getLogger(ROOT_LOGGER)
        assert len(root.handlers) == 2
        assert root.handlers[1].maxBytes == 1024 * 1024
        for handler in root.handlers:
            handler.close()
