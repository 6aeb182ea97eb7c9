"""Authentication components for the PowerSchool client.

This module provides:
- Client credentials encoding (``base64(client_id:client_secret)``)
- Multi-source credential resolution (value → env → .env → default)
- One-shot access token acquisition via the client credentials grant

Example:
    ```python
    from powerschool_client.auth import Credentials, fetch_access_token

    credentials = Credentials(secret="Y2xpZW50OnNlY3JldA==", token_url="https://ps.example.com/oauth/access_token")
    token = await fetch_access_token(credentials)
    ```
"""

from powerschool_client.auth.credentials import CredentialResolver, Credentials, encode_client_secret
from powerschool_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
    TokenFetchError,
)
from powerschool_client.auth.token import AccessToken, fetch_access_token

__all__ = [
    "AccessToken",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "Credentials",
    "TokenFetchError",
    "encode_client_secret",
    "fetch_access_token",
]
