"""PowerSchool Client - async client for the PowerSchool REST API.

This library provides:
- OAuth2 client-credentials bootstrap with an explicit readiness state
- Query string construction for expansions, extensions, filters and paging
- A response transform pipeline (JSON first, then your own functions)
- Error normalization for failed calls

Example:
    ```python
    from powerschool_client import ClientConfig, Credentials, PowerSchoolClient, QueryOptions

    config = ClientConfig(
        credentials=Credentials.from_client_id(
            "my-client-id", "my-client-secret", token_url="https://district.powerschool.com/oauth/access_token"
        ),
        api_base_url="https://district.powerschool.com",
    )

    client = await PowerSchoolClient.create(config)
    try:
        school = await client.get("ws/v1/school", 3)
    except Exception as e:
        raise PowerSchoolClient.normalize_error(e, "Could not load school 3.")
    ```
"""

from powerschool_client.auth import Credentials, CredentialResolver, TokenFetchError
from powerschool_client.client import Failed, Initializing, PowerSchoolClient, Ready
from powerschool_client.config import ClientConfig
from powerschool_client.errors import APIError, ErrorKind, NotReadyError, classify_error, normalize_error
from powerschool_client.request import QueryOptions, ResourceQuery, build_resource_path

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ClientConfig",
    "CredentialResolver",
    "Credentials",
    "ErrorKind",
    "Failed",
    "Initializing",
    "NotReadyError",
    "PowerSchoolClient",
    "QueryOptions",
    "Ready",
    "ResourceQuery",
    "TokenFetchError",
    "__version__",
    "build_resource_path",
    "classify_error",
    "normalize_error",
]
