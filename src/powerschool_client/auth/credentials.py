"""Client credentials and multi-source credential resolution.

PowerSchool expects the plugin's client ID and client secret joined by a
colon and base64-encoded, sent as HTTP Basic credentials to the OAuth
access token endpoint. :class:`Credentials` holds that pre-encoded secret
together with the endpoint URL.

:class:`CredentialResolver` loads raw values from several sources.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Example:
    ```python
    from powerschool_client.auth import CredentialResolver, Credentials

    resolver = CredentialResolver()
    credentials = Credentials.from_client_id(
        resolver.resolve(env_var_name="POWERSCHOOL_CLIENT_ID", required=True),
        resolver.resolve(env_var_name="POWERSCHOOL_CLIENT_SECRET_RAW", required=True),
        token_url="https://district.powerschool.com/oauth/access_token",
    )
    ```

Security Considerations:
    - Credentials are never logged in full (masked with ***)
    - Only source information is logged (env var name, file path, etc.)
    - File-based credentials have whitespace stripped
"""

import base64
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from powerschool_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)


def encode_client_secret(client_id: str, client_secret: str) -> str:
    """Join a client ID and secret with a colon and base64-encode them."""
    raw = f"{client_id}:{client_secret}".encode()
    return base64.b64encode(raw).decode("ascii")


@dataclass(frozen=True)
class Credentials:
    """Pre-encoded client secret plus the token endpoint it is valid for.

    Attributes:
        secret: ``base64(client_id:client_secret)``, sent verbatim after ``Basic``.
        token_url: URL of the OAuth access token endpoint.
    """

    secret: str
    token_url: str

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("secret must be provided")
        if not self.token_url:
            raise ValueError("token_url must be provided")

    def __repr__(self) -> str:
        return f"Credentials(secret='***', token_url={self.token_url!r})"

    @classmethod
    def from_client_id(cls, client_id: str, client_secret: str, token_url: str) -> "Credentials":
        """Build credentials from a plain client ID and client secret."""
        if not client_id:
            raise ValueError("client_id must be provided")
        if not client_secret:
            raise ValueError("client_secret must be provided")
        return cls(secret=encode_client_secret(client_id, client_secret), token_url=token_url)

    @property
    def authorization_header(self) -> str:
        return f"Basic {self.secret}"


class CredentialResolver:
    """Resolve credentials from multiple sources with priority ordering.

    Explicit values take precedence over environment variables, which take
    precedence over .env file values, which finally take precedence over
    defaults. The .env file is loaded into the process environment once,
    without overriding variables that are already set.

    Example:
        ```python
        resolver = CredentialResolver()

        base_url = resolver.resolve(env_var_name="POWERSCHOOL_API_BASE_URL", required=True)
        timeout = resolver.resolve(env_var_name="POWERSCHOOL_TIMEOUT", default="30")
        ```
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize credential resolver.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to load .env file. Set to False to skip
                .env file loading (useful for testing).
        """
        self._dotenv_loaded = False
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        try:
            load_dotenv(dotenv_path=self._dotenv_path)
            logger.debug("Loaded .env file for credential resolution")
        except OSError as e:
            logger.warning(f"Failed to load .env file: {e}")
        self._dotenv_loaded = True

    def _mask_credential(self, value: str | None) -> str:
        if value is None:
            return "None"
        return "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a credential from multiple sources.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check. Values loaded
                from the .env file are visible here too.
            default: Default value if not found elsewhere.
            required: If True, raises CredentialNotFoundError when the
                credential cannot be resolved.
            mask_in_logs: If True (default), masks credential values in log
                messages. Disable for non-sensitive values such as URLs.

        Returns:
            Resolved credential value, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required=True and nothing was found.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a credential from a file.

        The path may be given directly or through an environment variable,
        and supports ``~`` and ``$VAR`` expansion. Contents are stripped of
        surrounding whitespace.

        Raises:
            CredentialFileError: If required=True and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name, mask_in_logs=False) or None

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
            logger.debug(f"Resolved credential from file: {path_obj} (***)")
            return content

        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None

        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None
