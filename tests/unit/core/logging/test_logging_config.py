"""
Tests for logging configuration.

Tests LoggingConfig, LogLevel, and LogFormat.
"""

import pytest

from src.request_helper.core.logging.config import LoggingConfig, LogLevel, LogFormat


class TestEnums:
    """Tests for LogLevel and LogFormat."""

    def test_log_level_values(self):
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.CRITICAL.value == "CRITICAL"
        assert isinstance(LogLevel.INFO, str)

    def test_log_format_values(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.TEXT.value == "text"


class TestLoggingConfig:
    """Tests for LoggingConfig dataclass."""

    def test_default_config(self):
        """Default LoggingConfig has expected values."""
        config = LoggingConfig()

        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.TEXT
        assert config.enable_console is True
        assert config.enable_file is False
        assert config.file_path is None
        assert config.max_bytes == 10 * 1024 * 1024
        assert config.backup_count == 5
        assert config.enable_request_id is True
        assert config.extra_fields == {}

    def test_create_from_strings(self):
        config = LoggingConfig.create(level="debug", format="JSON")
        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.JSON

    def test_file_requires_path(self):
        with pytest.raises(ValueError, match="file_path"):
            LoggingConfig.create(enable_file=True)

    @pytest.mark.parametrize("kwargs", [{"max_bytes": 0}, {"backup_count": -1}])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            LoggingConfig.create(**kwargs)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingConfig.create(level="LOUD")
