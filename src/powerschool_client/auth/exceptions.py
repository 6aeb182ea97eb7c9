"""Custom exceptions for credential resolution and token acquisition.

This module defines exceptions used throughout the authentication system:
resolving client credentials from the environment and exchanging them for
an access token at the OAuth endpoint.

Example:
    ```python
    from powerschool_client.auth.exceptions import TokenFetchError

    try:
        token = await fetch_access_token(credentials)
    except TokenFetchError as e:
        print(f"Token request failed ({e.status_code}): {e}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any authentication failure.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""

    pass


class TokenFetchError(CredentialError):
    """Raised when the OAuth endpoint does not hand out an access token.

    Covers network failures, non-2xx responses and token responses
    without an ``access_token`` field.

    Attributes:
        status_code: HTTP status of the token response, or None when no
            response was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
