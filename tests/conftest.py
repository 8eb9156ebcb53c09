"""
Pytest configuration and fixtures for smart-http-client tests.
"""

import pytest
import responses as responses_lib

from src.smart_http.core.config import HTTPClientConfig
from src.smart_http.core.http_client import HTTPClient
from src.smart_http.core.lifecycle import RequestLifecycle
from src.smart_http.core.logging.config import LoggingConfig
from src.smart_http.core.logging.filters import clear_correlation_id


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
def client():
    """HTTP client instance for testing."""
    client = HTTPClient(config=HTTPClientConfig.create(timeout=10))
    yield client
    client.close()


@pytest.fixture
def logging_config():
    """Console-only DEBUG logging config."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture(autouse=True)
def _reset_correlation_id():
    yield
    clear_correlation_id()


@pytest.fixture
def package_logger():
    """Root logger name of the package as imported here ("src.smart_http" under pytest)."""
    return RequestLifecycle.__module__.split(".core.")[0]
