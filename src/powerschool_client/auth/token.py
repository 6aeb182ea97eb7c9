"""One-shot access token acquisition via the client credentials grant."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from powerschool_client.auth.credentials import Credentials
from powerschool_client.auth.exceptions import TokenFetchError

logger = logging.getLogger(__name__)

GRANT_BODY = "grant_type=client_credentials"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"


@dataclass(frozen=True)
class AccessToken:
    """Access token handed out by the OAuth endpoint.

    Attributes:
        value: The bearer token (``access_token`` in the response).
        token_type: Usually ``"Bearer"``.
        expires: Expiry as reported by the server, kept as a string.
        raw: The untouched token response.
    """

    value: str = field(repr=False)
    token_type: str = ""
    expires: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, data: Any) -> "AccessToken":
        """Adopt a parsed token response.

        Raises:
            TokenFetchError: If the payload is not an object or lacks ``access_token``.
        """
        if not isinstance(data, Mapping):
            raise TokenFetchError("Token response was not a JSON object")

        value = data.get("access_token")
        if not value:
            raise TokenFetchError("Token response did not contain an access_token")

        expires = data.get("expires", data.get("expires_in", ""))
        return cls(
            value=str(value),
            token_type=str(data.get("token_type", "")),
            expires=str(expires),
            raw=dict(data),
        )

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.value}"


class _BorrowedTransport(httpx.AsyncBaseTransport):
    """Delegates requests to a caller-owned transport but never closes it.

    The same transport is reused by the resource client after the token
    request, so closing the temporary token client must leave it open.
    """

    def __init__(self, wrapped_transport: httpx.AsyncBaseTransport) -> None:
        self._wrapped_transport = wrapped_transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._wrapped_transport.handle_async_request(request)

    async def aclose(self) -> None:
        pass


async def fetch_access_token(
    credentials: Credentials,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = 30.0,
) -> AccessToken:
    """POST the client credentials grant to the token endpoint.

    Args:
        credentials: Pre-encoded client secret and token endpoint URL.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
        timeout: Request timeout in seconds.

    Returns:
        The token adopted from the JSON response.

    Raises:
        TokenFetchError: On network failure, an invalid token URL, a non-2xx
            status, or an unusable response body. The request is never retried.
    """
    headers = {
        "Authorization": credentials.authorization_header,
        "Content-Type": FORM_CONTENT_TYPE,
    }

    if transport is not None:
        transport = _BorrowedTransport(transport)

    logger.debug(f"Requesting access token from {credentials.token_url}")
    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.post(credentials.token_url, content=GRANT_BODY, headers=headers)
    except httpx.InvalidURL as e:
        raise TokenFetchError(f"Invalid token endpoint URL {credentials.token_url!r}: {e}") from e
    except httpx.HTTPError as e:
        raise TokenFetchError(f"Failed to connect to token endpoint {credentials.token_url}: {e}") from e

    if not response.is_success:
        raise TokenFetchError(
            f"Token request failed with status code {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise TokenFetchError("Token response was not valid JSON", status_code=response.status_code) from e

    return AccessToken.from_response(data)
