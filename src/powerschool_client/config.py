"""Client configuration.

Configuration is supplied once at construction and never changes. It can be
built directly or resolved from the environment (and a ``.env`` file):

=====================================  =========================================
Variable                               Meaning
=====================================  =========================================
``POWERSCHOOL_API_BASE_URL``           Base URL of the PowerSchool server (required)
``POWERSCHOOL_CLIENT_SECRET``          Pre-encoded ``base64(client_id:secret)``
``POWERSCHOOL_CLIENT_ID``              Plain client ID, used with the raw secret
``POWERSCHOOL_CLIENT_SECRET_RAW``      Plain client secret
``POWERSCHOOL_CLIENT_SECRET_FILE``     File holding the pre-encoded secret
``POWERSCHOOL_TOKEN_URL``              Defaults to ``<base>/oauth/access_token``
``POWERSCHOOL_TIMEOUT``                Request timeout in seconds (default 30)
=====================================  =========================================
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx

from powerschool_client.auth.credentials import CredentialResolver, Credentials
from powerschool_client.auth.exceptions import CredentialNotFoundError
from powerschool_client.transport.transformers import ResponseTransformer

DEFAULT_TIMEOUT = 30.0
TOKEN_PATH = "oauth/access_token"


@dataclass(frozen=True)
class ClientConfig:
    """Everything a PowerSchoolClient needs to bootstrap.

    Attributes:
        credentials: Pre-encoded secret and token endpoint
        api_base_url: Base URL for resource requests
        response_transformers: Applied in order after JSON parsing
        transport: Optional httpx transport shared by the token and resource requests
        timeout: Request timeout in seconds
    """

    credentials: Credentials
    api_base_url: str
    response_transformers: tuple[ResponseTransformer, ...] = ()
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False, compare=False)
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_base_url:
            raise ValueError("api_base_url must be provided")
        # Accept any iterable of transformers but store an immutable copy
        object.__setattr__(self, "response_transformers", tuple(self.response_transformers))

    @property
    def token_url(self) -> str:
        return self.credentials.token_url

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        response_transformers: Iterable[ResponseTransformer] = (),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ClientConfig":
        """Resolve a configuration from environment variables and ``.env``.

        Raises:
            CredentialNotFoundError: If the base URL or the client secret is missing.
        """
        resolver = resolver or CredentialResolver()

        base_url = resolver.resolve(env_var_name="POWERSCHOOL_API_BASE_URL", required=True, mask_in_logs=False)
        token_url = resolver.resolve(
            env_var_name="POWERSCHOOL_TOKEN_URL",
            default=f"{base_url.rstrip('/')}/{TOKEN_PATH}",
            mask_in_logs=False,
        )
        timeout = resolver.resolve(env_var_name="POWERSCHOOL_TIMEOUT", default=str(DEFAULT_TIMEOUT), mask_in_logs=False)

        credentials = _resolve_credentials(resolver, token_url)
        return cls(
            credentials=credentials,
            api_base_url=base_url,
            response_transformers=tuple(response_transformers),
            transport=transport,
            timeout=float(timeout),
        )


def _resolve_credentials(resolver: CredentialResolver, token_url: str) -> Credentials:
    secret = resolver.resolve(env_var_name="POWERSCHOOL_CLIENT_SECRET")
    if secret is None:
        secret = resolver.resolve_from_file(env_var_name="POWERSCHOOL_CLIENT_SECRET_FILE")
    if secret:
        return Credentials(secret=secret, token_url=token_url)

    client_id = resolver.resolve(env_var_name="POWERSCHOOL_CLIENT_ID", mask_in_logs=False)
    raw_secret = resolver.resolve(env_var_name="POWERSCHOOL_CLIENT_SECRET_RAW")
    if client_id and raw_secret:
        return Credentials.from_client_id(client_id, raw_secret, token_url)

    raise CredentialNotFoundError(
        "No PowerSchool client secret found (set POWERSCHOOL_CLIENT_SECRET, "
        "POWERSCHOOL_CLIENT_SECRET_FILE, or POWERSCHOOL_CLIENT_ID and POWERSCHOOL_CLIENT_SECRET_RAW)",
        env_var_name="POWERSCHOOL_CLIENT_SECRET",
    )
