"""Google Service Account request signing.

Service accounts are used for server-to-server authentication without user
interaction. The calendar being managed must be shared with the service
account email, or the account must have domain-wide delegation and a
`subject` to impersonate.

Key material comes from a `ClientConfig` in one of these forms:
- a JSON key file downloaded from Google Cloud Console
- a PEM private key file
- an inline JSON key (dict or text) or inline PEM private key

Credentials are built lazily on the first signed request, so constructing a
signer never touches the filesystem or the network. Token caching and
refresh are handled by google-auth.

Example:
    >>> signer = ServiceAccountSigner(config)
    >>> headers = {}
    >>> signer.sign("GET", "https://www.googleapis.com/calendar/v3/...", headers)
    >>> headers["authorization"]
    'Bearer ya29...'
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from google.auth import exceptions as google_exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from calendar_api.google.exceptions import (
    ConfigurationError,
    CredentialsNotFoundError,
    SigningError,
)

if TYPE_CHECKING:
    from calendar_api.config import ClientConfig

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


class ServiceAccountSigner:
    """Attaches service account bearer tokens to outgoing requests.

    Safe to share between threads: credentials are created once under a lock
    and the configuration is immutable.
    """

    def __init__(self, config: ClientConfig):
        self._config = config
        self._credentials: Any = None
        self._auth_request: Request | None = None
        self._lock = threading.Lock()

    @property
    def email(self) -> str:
        """Get the service account email address.

        Share your calendars with this email to grant access.
        """
        return self._config.service_account_email

    @property
    def credentials(self):
        """Get the service account credentials, loading them on first use."""
        if self._credentials is None:
            with self._lock:
                if self._credentials is None:
                    credentials = self._load_credentials()
                    self._auth_request = Request()
                    # Published last: sign() relies on _auth_request once this is set
                    self._credentials = credentials
        return self._credentials

    def sign(self, method: str, url: str, headers: dict[str, str]) -> None:
        """Add an authorization header for the given request.

        Args:
            method: HTTP method of the outgoing request.
            url: Full URL of the outgoing request.
            headers: Header mapping updated in place.

        Raises:
            ConfigurationError: If the key material cannot be loaded.
            SigningError: If an access token cannot be obtained.
        """
        credentials = self.credentials
        try:
            credentials.before_request(self._auth_request, method, url, headers)
        except google_exceptions.GoogleAuthError as e:
            raise SigningError(f"Failed to obtain access token for {self.email}: {e}") from e

    def _load_credentials(self):
        """Create google-auth credentials from the configured key source."""
        config = self._config
        if config.key_file:
            info = self._read_key_file(Path(config.key_file))
        else:
            info = self._parse_inline_key(config.key)

        try:
            credentials = service_account.Credentials.from_service_account_info(
                info,
                scopes=[config.scope],
            )
        except (ValueError, KeyError) as e:
            raise ConfigurationError(f"Invalid service account key: {e}") from e

        if config.subject:
            credentials = credentials.with_subject(config.subject)
            logger.info(f"Created delegated credentials for: {config.subject}")

        logger.info(f"Service account initialized: {self.email}")
        logger.info(f"Scope: {config.scope}")
        return credentials

    def _read_key_file(self, key_path: Path) -> dict[str, Any]:
        """Read a JSON or PEM key file into a service account info dict."""
        if not key_path.exists():
            raise CredentialsNotFoundError(str(key_path))

        try:
            text = key_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read key file {key_path}: {e}") from e

        if key_path.suffix == ".json":
            return self._parse_json_key(text)
        return self._pem_info(text)

    def _parse_inline_key(self, key: str | dict[str, Any] | None) -> dict[str, Any]:
        """Turn inline key material into a service account info dict."""
        if isinstance(key, dict):
            return self._complete_info(dict(key))
        if key is None:
            raise ConfigurationError("Missing keyfile for Google OAuth")
        if key.lstrip().startswith("{"):
            return self._parse_json_key(key)
        return self._pem_info(key)

    def _parse_json_key(self, text: str) -> dict[str, Any]:
        try:
            key_data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in key: {e}") from e

        if not isinstance(key_data, dict):
            raise ConfigurationError("Invalid key: expected a JSON object")
        if key_data.get("type", "service_account") != "service_account":
            raise ConfigurationError(
                f"Invalid key: expected type 'service_account', got '{key_data.get('type')}'"
            )
        return self._complete_info(key_data)

    def _pem_info(self, private_key: str) -> dict[str, Any]:
        return {
            "client_email": self._config.service_account_email,
            "private_key": private_key,
            "token_uri": TOKEN_URI,
        }

    def _complete_info(self, info: dict[str, Any]) -> dict[str, Any]:
        # PEM-derived and hand-built keys often lack these fields
        info.setdefault("client_email", self._config.service_account_email)
        info.setdefault("token_uri", TOKEN_URI)
        return info

    def get_info(self) -> dict:
        """Get information about the service account.

        Returns:
            Dictionary with service account details, without key material.
        """
        return {
            "type": "service_account",
            "email": self.email,
            "scope": self._config.scope,
            "key_source": self._config.key_source,
            "subject": self._config.subject,
        }
