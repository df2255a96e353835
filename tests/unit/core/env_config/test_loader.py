"""Tests for environment configuration loading."""

import pytest

from src.beeper_desktop.core.env_config import (
    BeeperSettings,
    load_from_env,
    mask_secret,
    print_config_summary,
)
from src.beeper_desktop.core.exceptions import ConfigurationError
from src.beeper_desktop.core.logging import LogFormat, LoggingConfig, LogLevel


class TestBeeperSettings:

    def test_defaults(self):
        settings = BeeperSettings()
        assert settings.access_token is None
        assert settings.base_url == "http://localhost:23373"
        assert settings.timeout == 30.0
        assert settings.max_retries == 2
        assert settings.logging_enabled is False

    def test_token_without_prefix(self, monkeypatch):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_plain")
        assert BeeperSettings().access_token == "bdt_plain"

    def test_token_with_prefix(self, monkeypatch):
        monkeypatch.setenv("BEEPER_DESKTOP_ACCESS_TOKEN", "bdt_prefixed")
        assert BeeperSettings().access_token == "bdt_prefixed"

    def test_prefixed_fields(self, monkeypatch):
        monkeypatch.setenv("BEEPER_DESKTOP_TIMEOUT", "15")
        monkeypatch.setenv("BEEPER_DESKTOP_MAX_RETRIES", "4")
        monkeypatch.setenv("BEEPER_DESKTOP_LOG_LEVEL", "debug")
        monkeypatch.setenv("BEEPER_DESKTOP_LOG_FORMAT", "JSON")

        settings = BeeperSettings()

        assert settings.timeout == 15.0
        assert settings.max_retries == 4
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.logging_enabled is True

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BEEPER_ACCESS_TOKEN=bdt_from_file\nBEEPER_DESKTOP_TIMEOUT=7\n")

        settings = BeeperSettings(_env_file=str(env_file))

        assert settings.access_token == "bdt_from_file"
        assert settings.timeout == 7.0


class TestLoadFromEnv:

    def test_builds_client_config(self, monkeypatch):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_env")
        monkeypatch.setenv("BEEPER_DESKTOP_BASE_URL", "http://127.0.0.1:30000")
        monkeypatch.setenv("BEEPER_DESKTOP_RETRY_BACKOFF", "0.5")

        config = load_from_env()

        assert config.access_token == "bdt_env"
        assert config.base_url == "http://127.0.0.1:30000/"
        assert config.retry_backoff == 0.5
        assert config.logging is None

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_env")
        monkeypatch.setenv("BEEPER_DESKTOP_MAX_RETRIES", "5")

        config = load_from_env(max_retries=0, access_token="bdt_override")

        assert config.max_retries == 0
        assert config.access_token == "bdt_override"

    def test_logging_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_env")
        monkeypatch.setenv("BEEPER_DESKTOP_LOG_FORMAT", "json")
        monkeypatch.setenv("BEEPER_DESKTOP_LOG_FILE_PATH", str(tmp_path / "beeper.log"))

        config = load_from_env()

        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == LogFormat.JSON
        assert config.logging.enable_file is True

    def test_explicit_logging_config(self, monkeypatch):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_env")
        logging_config = LoggingConfig.create(level="ERROR")

        assert load_from_env(logging=logging_config).logging is logging_config

    def test_missing_token(self):
        with pytest.raises(ConfigurationError, match="access_token"):
            load_from_env()

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_env")
        monkeypatch.setenv("BEEPER_DESKTOP_MAX_RETRIES", "99")

        with pytest.raises(ConfigurationError, match="invalid environment configuration"):
            load_from_env()


def test_print_config_summary_masks_token(capsys, monkeypatch):
    monkeypatch.setenv("BEEPER_ACCESS_TOKEN", "bdt_0123456789abcdef")

    print_config_summary(load_from_env())

    out = capsys.readouterr().out
    assert "bdt_***cdef" in out
    assert "bdt_0123456789abcdef" not in out
    assert "http://localhost:23373/" in out


@pytest.mark.parametrize("value,expected", [
    ("bdt_0123456789abcdef", "bdt_***cdef"),
    ("short", "***"),
    ("", ""),
])
def test_mask_secret(value, expected):
    assert mask_secret(value) == expected
