"""Client configuration.

A `ClientConfig` is an immutable value holding the service account identity,
one source of key material, and the timezone used for free/busy queries.
It can be built directly or from environment variables:

    GOOGLE_SERVICE_ACCOUNT_EMAIL     - service account email
    GOOGLE_SERVICE_ACCOUNT_KEY_FILE  - path to a .json or .pem key file
    GOOGLE_SERVICE_ACCOUNT_KEY       - inline key (JSON key or PEM text)
    GOOGLE_CALENDAR_TIMEZONE         - IANA timezone, e.g. Asia/Singapore
    GOOGLE_CALENDAR_SUBJECT          - optional user to impersonate

Variables from a `.env` file can be loaded first with `load_env_file`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from calendar_api.google.exceptions import ConfigurationError

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
CALENDAR_API_URL = "https://www.googleapis.com/calendar/v3"

DEFAULT_TIMEZONE = "UTC"

ENV_EMAIL = "GOOGLE_SERVICE_ACCOUNT_EMAIL"
ENV_KEY_FILE = "GOOGLE_SERVICE_ACCOUNT_KEY_FILE"
ENV_KEY = "GOOGLE_SERVICE_ACCOUNT_KEY"
ENV_TIMEZONE = "GOOGLE_CALENDAR_TIMEZONE"
ENV_SUBJECT = "GOOGLE_CALENDAR_SUBJECT"


def load_env_file(env_path: str | Path) -> dict[str, str]:
    """Export `KEY=value` settings from a .env file into the environment.

    Blank lines, comments and lines without `=` are skipped, and one pair of
    matching quotes around a value is removed. Variables already present in
    the environment keep their value.

    Returns:
        The variables that were newly set.
    """
    env_path = Path(env_path)
    if not env_path.is_file():
        return {}

    loaded: dict[str, str] = {}
    for line in env_path.read_text().splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]

        if key not in os.environ:
            os.environ[key] = value
            loaded[key] = value
    return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


@dataclass(frozen=True)
class ClientConfig:
    """Static credentials and defaults for a `CalendarClient`.

    Exactly one of `key_file` or `key` must be given. `key` may be the
    parsed JSON key (a dict), JSON key text, or a PEM private key.
    """

    service_account_email: str
    key_file: str | Path | None = None
    key: str | dict[str, Any] | None = None
    timezone: str = DEFAULT_TIMEZONE
    scope: str = CALENDAR_SCOPE
    subject: str | None = None

    def __post_init__(self) -> None:
        if not self.service_account_email:
            raise ConfigurationError(
                "Missing service account email for Google OAuth; "
                "check the client configuration"
            )
        has_file = self.key_file is not None and self.key_file != ""
        has_key = self.key is not None and self.key != ""
        if not has_file and not has_key:
            raise ConfigurationError(
                "Missing keyfile for Google OAuth; pass key_file or key in the configuration"
            )
        if has_file and has_key:
            raise ConfigurationError("Ambiguous key source; pass only one of key_file or key")

    @property
    def key_source(self) -> str:
        """Which key source is configured: "key_file" or "key"."""
        return "key_file" if self.key_file else "key"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> ClientConfig:
        """Build a config from environment variables.

        Args:
            env_file: Optional .env file loaded before reading the environment.

        Raises:
            ConfigurationError: If required variables are missing.
        """
        if env_file is not None:
            load_env_file(env_file)

        return cls(
            service_account_email=os.environ.get(ENV_EMAIL, ""),
            key_file=os.environ.get(ENV_KEY_FILE) or None,
            key=os.environ.get(ENV_KEY) or None,
            timezone=os.environ.get(ENV_TIMEZONE, DEFAULT_TIMEZONE),
            subject=os.environ.get(ENV_SUBJECT) or None,
        )
