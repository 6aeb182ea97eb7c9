"""Error handling utilities for HTTP responses and failed calls."""

import enum
import json

import httpx

from powerschool_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

NO_RESPONSE_SUFFIX = "  Request was made, no response was received."


class ErrorKind(enum.Enum):
    """How far a failed call got before it failed."""

    HTTP_STATUS = "http_status"  # a response with a non-2xx status arrived
    NO_RESPONSE = "no_response"  # the request was sent, nothing came back
    OTHER = "other"  # the request could not be built or sent


def raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate exception for HTTP error responses.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code

    exception_map = {
        400: BadRequestError,
        401: UnauthorizedError,
        403: ForbiddenError,
        404: NotFoundError,
        409: ConflictError,
        422: ValidationError,
        429: RateLimitError,
    }

    if status_code in exception_map:
        exc_class = exception_map[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    message = f"Request failed with status code {status_code}"

    if exc_class == RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        raise exc_class(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
        )

    raise exc_class(message=message, status_code=status_code, response=response)


def classify_error(error: BaseException) -> ErrorKind:
    """Classify a failed call, checking for a response first."""
    if getattr(error, "response", None) is not None:
        return ErrorKind.HTTP_STATUS
    if isinstance(error, httpx.RequestError):
        return ErrorKind.NO_RESPONSE
    return ErrorKind.OTHER


def _response_body_text(response: httpx.Response) -> str:
    """Render a response body for an error message.

    JSON objects and arrays are serialized compactly, anything else is
    used as text.
    """
    try:
        data = response.json()
    except ValueError:
        return response.text

    if isinstance(data, (dict, list)):
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return response.text


def _set_message(error: BaseException, message: str) -> None:
    error.args = (message, *error.args[1:])


def normalize_error(error: BaseException, prepend: str | None = None) -> BaseException:
    """Enrich an error message in place and return the same error.

    1. Response received with a non-2xx status: append ``": <body>."``
    2. Request made but no response received: append a fixed notice
    3. Anything else: message left as-is

    Args:
        error: Exception raised by ``PowerSchoolClient.get`` or httpx.
        prepend: Extra text placed at the start of the message, separated
            by two spaces.

    Returns:
        The same exception object, for chaining (``raise normalize_error(e) from e``).
    """
    message = str(error.args[0]) if error.args else str(error)

    if prepend:
        message = f"{prepend}  {message}"

    kind = classify_error(error)
    if kind is ErrorKind.HTTP_STATUS:
        message += f": {_response_body_text(error.response)}."
    elif kind is ErrorKind.NO_RESPONSE:
        message += NO_RESPONSE_SUFFIX

    _set_message(error, message)
    return error
