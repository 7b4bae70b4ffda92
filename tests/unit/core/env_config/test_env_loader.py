"""
Tests for environment-based configuration.
"""

import os

import pytest
from pydantic import ValidationError

from src.request_helper.core.config import ClientConfig
from src.request_helper.core.env_config.loader import load_from_env
from src.request_helper.core.env_config.settings import RequestHelperSettings
from src.request_helper.core.logging.config import LogLevel, LogFormat


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any REQUEST_HELPER_* variables inherited from the shell."""
    for name in list(os.environ):
        if name.upper().startswith("REQUEST_HELPER_"):
            monkeypatch.delenv(name)


class TestRequestHelperSettings:
    """Test pydantic settings."""

    def test_defaults(self):
        settings = RequestHelperSettings(_env_file=None)
        assert settings.base_url == ""
        assert settings.timeout == 30.0
        assert settings.retry == 0
        assert settings.retry_status_codes == frozenset({408, 429, 500, 502, 503, 504})
        assert settings.log_enabled is False

    def test_env_variables(self, monkeypatch):
        monkeypatch.setenv("REQUEST_HELPER_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("REQUEST_HELPER_TIMEOUT", "12.5")
        monkeypatch.setenv("REQUEST_HELPER_RETRY", "3")
        monkeypatch.setenv("REQUEST_HELPER_RETRY_STATUS_CODES", "[429, 503]")

        settings = RequestHelperSettings(_env_file=None)

        assert settings.base_url == "https://env.example.com"
        assert settings.timeout == 12.5
        assert settings.retry == 3
        assert settings.retry_status_codes == frozenset({429, 503})

    @pytest.mark.parametrize("name, value", [
        ("REQUEST_HELPER_TIMEOUT", "0"),
        ("REQUEST_HELPER_RETRY", "11"),
        ("REQUEST_HELPER_BACKOFF_TYPE", "quadratic"),
        ("REQUEST_HELPER_RETRY_STATUS_CODES", "[700]"),
        ("REQUEST_HELPER_RESPONSE_TYPE", "yaml"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            RequestHelperSettings(_env_file=None)


class TestLoadFromEnv:
    """Test load_from_env function."""

    def test_load_with_defaults(self):
        config = load_from_env(env_file=None)
        assert isinstance(config, ClientConfig)
        assert config.base_url is None
        assert config.timeout == 30.0
        assert config.logging is None

    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / "test.env"
        env_file.write_text(
            "REQUEST_HELPER_BASE_URL=https://test.example.com/\n"
            "REQUEST_HELPER_RETRY=2\n"
            "REQUEST_HELPER_BACKOFF_TYPE=exponential\n"
            "REQUEST_HELPER_VERBOSE=true\n"
        )

        config = load_from_env(env_file=str(env_file))

        assert config.base_url == "https://test.example.com"
        assert config.retry.retry == 2
        assert config.retry.backoff_type == "exponential"
        assert config.verbose is True

    def test_env_beats_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / "test.env"
        env_file.write_text("REQUEST_HELPER_TIMEOUT=5\n")
        monkeypatch.setenv("REQUEST_HELPER_TIMEOUT", "7")

        assert load_from_env(env_file=str(env_file)).timeout == 7

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("REQUEST_HELPER_BASE_URL", "https://env.example.com")
        config = load_from_env(env_file=None, base_url="https://override.com", retry=4)
        assert config.base_url == "https://override.com"
        assert config.retry.retry == 4

    def test_logging_section(self, monkeypatch, tmp_path):
        log_file = tmp_path / "app.log"
        monkeypatch.setenv("REQUEST_HELPER_LOG_ENABLED", "true")
        monkeypatch.setenv("REQUEST_HELPER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("REQUEST_HELPER_LOG_FORMAT", "json")
        monkeypatch.setenv("REQUEST_HELPER_LOG_FILE_PATH", str(log_file))

        config = load_from_env(env_file=None)

        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.logging.enable_file is True
        assert config.logging.file_path == str(log_file)
