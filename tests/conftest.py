"""
Pytest configuration and fixtures for request-helper tests.
"""

import pytest
import responses as responses_lib

from src.request_helper.core.client import HTTPClient
from src.request_helper.core.context import reset_request_counter
from src.request_helper.core.events import EVENT_TYPES
from src.request_helper.core.logging.config import LoggingConfig
from src.request_helper.core.logging.filters import clear_request_id


@pytest.fixture(autouse=True)
def fresh_request_state():
    """Every test starts with req_1 and no request id on the thread."""
    reset_request_counter()
    clear_request_id()
    yield
    clear_request_id()


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(base_url):
    """HTTP client instance for testing."""
    client = HTTPClient(base_url=base_url, timeout=10)
    yield client
    client.close()


@pytest.fixture
def recorded_events(client):
    """Subscribe to every lifecycle event of ``client``; returns [(type, data), ...]."""
    seen = []
    for event_type in sorted(EVENT_TYPES):
        client.events.on(event_type, lambda data, t=event_type: seen.append((t, data)))
    return seen


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
