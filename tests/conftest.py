"""Pytest configuration and shared fixtures for powerschool-client tests."""

import httpx
import pytest

from powerschool_client.testing import create_mock_transport, create_test_config


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CLIENT_", "POWERSCHOOL_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Every request seen by the mock transport, in order."""
    return []


@pytest.fixture
def schools_transport(sent_requests):
    """Mock transport answering the token POST and echoing API paths."""

    def api_handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"path": request.url.path, "query": request.url.query.decode()})

    return create_mock_transport(api_handler, requests=sent_requests)


@pytest.fixture
def schools_config(schools_transport):
    return create_test_config(schools_transport)
