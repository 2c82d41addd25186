# tests/unit/config/test_settings.py — v2
"""Tests for config/settings.py: typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from account_summaries.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.log_file is None

    def test_default_input(self):
        s = Settings(_env_file=None)
        assert s.summaries_path is None
        assert s.json_indent == 2


class TestSettingsValidation:
    def test_bad_rotation(self):
        with pytest.raises(ConfigurationError, match="LOG_ROTATION"):
            Settings(_env_file=None, log_rotation="huge")

    def test_negative_retention(self):
        with pytest.raises(ConfigurationError, match="LOG_RETENTION"):
            Settings(_env_file=None, log_retention=-1)

    def test_errors_joined(self):
        with pytest.raises(ConfigurationError, match="; "):
            Settings(_env_file=None, log_rotation="x", log_retention=-1)

    def test_negative_indent(self):
        with pytest.raises(ValueError, match="json_indent"):
            Settings(_env_file=None, json_indent=-1)

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="LOUD")


class TestEnvironment:
    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("SUMMARIES_PATH", "/data/summaries.json")
        monkeypatch.setenv("LOG_FORMAT", "text")
        s = Settings(_env_file=None)
        assert s.summaries_path == Path("/data/summaries.json")
        assert s.log_format == "text"

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        env = tmp_path / ".env"
        env.write_text("LOG_LEVEL=DEBUG\nUNRELATED=1\n", encoding="utf-8")
        s = Settings(_env_file=env)
        assert s.log_level == "DEBUG"


class TestLoadSettings:
    def test_with_overrides(self):
        s = load_settings(log_level="DEBUG", json_indent=0)
        assert s.log_level == "DEBUG"
        assert s.json_indent == 0
