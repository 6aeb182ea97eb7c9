"""Error handling and normalization for PowerSchool API calls."""

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
from powerschool_client.errors.handler import (
    NO_RESPONSE_SUFFIX,
    ErrorKind,
    classify_error,
    normalize_error,
    raise_for_status,
)

__all__ = [
    "NOT_READY_MESSAGE",
    "NO_RESPONSE_SUFFIX",
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ErrorKind",
    "ForbiddenError",
    "NotFoundError",
    "NotReadyError",
    "RateLimitError",
    "ServerError",
    "UnauthorizedError",
    "ValidationError",
    "classify_error",
    "normalize_error",
    "raise_for_status",
]
