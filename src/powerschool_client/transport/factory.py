"""Authenticated transport for PowerSchool resource requests.

A :class:`ResourceTransport` is built once an access token is known. It
wraps an ``httpx.AsyncClient`` bound to the API base URL with the bearer
token in the ``Authorization`` header, and runs every successful response
body through the transform pipeline.

Example:
    ```python
    from powerschool_client.transport import create_transport

    transport = create_transport(
        token,
        base_url="https://district.powerschool.com",
        transformers=[lambda body: body.get("students", body)],
    )

    async with transport:
        students = await transport.get("ws/v1/district/student?pagesize=1000")
    ```
"""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from powerschool_client.auth.token import AccessToken
from powerschool_client.errors.handler import raise_for_status
from powerschool_client.transport.transformers import ResponseTransformer, apply_pipeline, build_pipeline

logger = logging.getLogger(__name__)


class ResourceTransport:
    """GET-only transport pre-bound to a base URL and an access token.

    Args:
        client: Configured httpx client (base URL and headers already set)
        pipeline: Response transform stages, JSON parsing first
    """

    def __init__(self, client: httpx.AsyncClient, pipeline: tuple[ResponseTransformer, ...]) -> None:
        self._client = client
        self.pipeline = pipeline

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    async def __aenter__(self):
        """Enter async context, delegating to the wrapped client."""
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to the wrapped client."""
        return await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str) -> Any:
        """GET a path relative to the base URL and return the transformed body.

        Raises:
            APIError subclass: For non-2xx responses.
            httpx.RequestError: When no response was received.
        """
        logger.debug(f"GET {path}")
        response = await self._client.get(path)
        raise_for_status(response)
        return apply_pipeline(response.text, self.pipeline)


def create_transport(
    access_token: AccessToken,
    base_url: str,
    transformers: Iterable[ResponseTransformer] | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = 30.0,
) -> ResourceTransport:
    """Build a transport for a known access token.

    Performs no I/O.

    Args:
        access_token: Token whose value goes into ``Authorization: Bearer``
        base_url: Base PowerSchool API URL
        transformers: Functions applied to response bodies after JSON parsing
        transport: Optional underlying httpx transport
        timeout: Request timeout in seconds

    Returns:
        A ready ResourceTransport
    """
    headers = {"Authorization": access_token.authorization_header}
    client = httpx.AsyncClient(base_url=base_url, headers=headers, transport=transport, timeout=timeout)
    return ResourceTransport(client, build_pipeline(transformers))
