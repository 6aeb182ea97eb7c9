"""PowerSchool API client.

The client starts out ``Initializing``. :meth:`PowerSchoolClient.initialize`
fetches an access token once and builds the authenticated transport, moving
the client to ``Ready``; if the token request fails the client moves to
``Failed`` instead and stays there. There is no token refresh.

Example:
    ```python
    from powerschool_client import ClientConfig, PowerSchoolClient, QueryOptions

    async with PowerSchoolClient(ClientConfig.from_env()) as client:
        students = await client.get(
            "ws/v1/district/student",
            options=QueryOptions(expansions=["demographics"], query="name.last_name==Sm*"),
        )
    ```
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from powerschool_client.auth.exceptions import TokenFetchError
from powerschool_client.auth.token import fetch_access_token
from powerschool_client.config import ClientConfig
from powerschool_client.errors.exceptions import NotReadyError
from powerschool_client.errors.handler import normalize_error
from powerschool_client.request import QueryOptions, ResourceId, build_resource_path
from powerschool_client.transport.factory import ResourceTransport, create_transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Initializing:
    """No token yet."""


@dataclass(frozen=True)
class Ready:
    """Token fetched; the transport is bound to it for the client's lifetime."""

    transport: ResourceTransport


@dataclass(frozen=True)
class Failed:
    """The token request failed; the client will never become ready."""

    error: TokenFetchError


ReadinessState = Initializing | Ready | Failed


class PowerSchoolClient:
    """Authenticated read access to the PowerSchool REST API.

    Args:
        config: Immutable client configuration

    Use :meth:`create`, or ``async with PowerSchoolClient(config)``, to get a
    client that is already ``Ready``. Leaving the ``async with`` block closes
    the transport.
    """

    normalize_error = staticmethod(normalize_error)

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self._state: ReadinessState = Initializing()
        self._init_lock = asyncio.Lock()

    @classmethod
    async def create(cls, config: ClientConfig) -> "PowerSchoolClient":
        """Construct a client and wait for initialization.

        Raises:
            TokenFetchError: If no access token could be obtained.
        """
        client = cls(config)
        await client.initialize()
        return client

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return isinstance(self._state, Ready)

    def _transition(self, state: Ready | Failed) -> None:
        if not isinstance(self._state, Initializing):
            raise RuntimeError(f"Client already left the initializing state ({type(self._state).__name__})")
        self._state = state

    async def initialize(self) -> None:
        """Fetch the access token and build the transport, exactly once.

        Subsequent calls return immediately when the client is ready and
        re-raise the original failure when it is not.

        Raises:
            TokenFetchError: If the token request failed.
        """
        async with self._init_lock:
            if isinstance(self._state, Initializing):
                try:
                    token = await fetch_access_token(
                        self.config.credentials,
                        transport=self.config.transport,
                        timeout=self.config.timeout,
                    )
                except TokenFetchError as e:
                    logger.error(f"Failed to obtain PowerSchool access token: {e}")
                    self._transition(Failed(e))
                else:
                    transport = create_transport(
                        token,
                        self.config.api_base_url,
                        self.config.response_transformers,
                        transport=self.config.transport,
                        timeout=self.config.timeout,
                    )
                    self._transition(Ready(transport))
                    logger.info(f"PowerSchool client ready for {self.config.api_base_url}")

        if isinstance(self._state, Failed):
            raise self._state.error

    async def get(
        self,
        resource: str,
        resource_id: ResourceId | None = None,
        options: QueryOptions | None = None,
    ) -> Any:
        """GET a resource and return the transformed response body.

        Args:
            resource: Resource path relative to the API base URL, e.g.
                ``"ws/v1/district/school"``
            resource_id: Appended as ``/<id>`` when truthy
            options: Expansions, extensions, filter query and page size.
                Without options no query string is sent at all.

        Raises:
            NotReadyError: If the client is not ready.
            APIError subclass: For non-2xx responses.
            httpx.RequestError: When no response was received.
        """
        state = self._state
        if isinstance(state, Failed):
            raise NotReadyError() from state.error
        if not isinstance(state, Ready):
            raise NotReadyError()

        path = build_resource_path(resource, resource_id, options)
        return await state.transport.get(path)

    async def aclose(self) -> None:
        if isinstance(self._state, Ready):
            await self._state.transport.aclose()

    async def __aenter__(self):
        """Initialize on entry; a no-op when the client is already ready."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
