"""Tests for structured API exceptions."""

import pytest
from httpx import Response

from powerschool_client.errors.exceptions import (
    NOT_READY_MESSAGE,
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    NotReadyError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.unit
def test_api_error_instantiation():
    """Test APIError can be instantiated with all attributes."""
    response = Response(status_code=500)

    error = APIError(message="Test error", status_code=500, response=response)

    assert str(error) == "Test error"
    assert error.status_code == 500
    assert error.response == response


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    assert issubclass(ClientError, APIError)

    assert issubclass(BadRequestError, ClientError)
    assert issubclass(UnauthorizedError, ClientError)
    assert issubclass(ForbiddenError, ClientError)
    assert issubclass(NotFoundError, ClientError)
    assert issubclass(ConflictError, ClientError)
    assert issubclass(ValidationError, ClientError)
    assert issubclass(RateLimitError, ClientError)

    assert issubclass(ServerError, APIError)


@pytest.mark.unit
def test_rate_limit_error_retry_after():
    """Test RateLimitError keeps retry_after alongside the base attributes."""
    error = RateLimitError("Too many requests", retry_after=30, status_code=429)

    assert error.retry_after == 30
    assert error.status_code == 429
    assert error.response is None


@pytest.mark.unit
def test_not_ready_error_fixed_message():
    """NotReadyError always carries the same message."""
    assert str(NotReadyError()) == NOT_READY_MESSAGE
    assert NOT_READY_MESSAGE == "API transport is not available."


@pytest.mark.unit
def test_not_ready_error_is_runtime_error():
    assert issubclass(NotReadyError, RuntimeError)
    assert not issubclass(NotReadyError, APIError)
