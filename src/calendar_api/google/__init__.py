"""Google service account authentication utilities."""

from calendar_api.google.exceptions import (
    ConfigurationError,
    CredentialsNotFoundError,
    GoogleAuthError,
    SigningError,
)
from calendar_api.google.service_account import ServiceAccountSigner

__all__ = [
    "ServiceAccountSigner",
    "GoogleAuthError",
    "ConfigurationError",
    "CredentialsNotFoundError",
    "SigningError",
]
