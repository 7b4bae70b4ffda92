"""
Tests for handler factories.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from src.request_helper.core.logging.filters import RequestIdFilter
from src.request_helper.core.logging.formatters import TextFormatter
from src.request_helper.core.logging.handlers import create_console_handler, create_file_handler


class TestConsoleHandler:
    def test_stdout_with_filters(self):
        id_filter = RequestIdFilter()
        handler = create_console_handler(logging.DEBUG, TextFormatter(), [id_filter])

        assert handler.stream is sys.stdout
        assert handler.level == logging.DEBUG
        assert isinstance(handler.formatter, TextFormatter)
        assert id_filter in handler.filters


class TestFileHandler:
    def test_rotation_settings(self, tmp_path):
        handler = create_file_handler(
            str(tmp_path / "logs" / "app.log"), logging.INFO, TextFormatter(),
            max_bytes=1024, backup_count=2,
        )
        try:
            assert isinstance(handler, RotatingFileHandler)
            assert handler.maxBytes == 1024
            assert handler.backupCount == 2
            assert (tmp_path / "logs").is_dir()
        finally:
            handler.close()
