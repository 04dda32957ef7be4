"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class ConfigurationError(GoogleAuthError):
    """Raised when the client configuration or key material is unusable."""

    pass


class CredentialsNotFoundError(ConfigurationError):
    """Raised when the service account key file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Service account key file not found at {path}. "
            "Download a key for the service account from Google Cloud Console."
        )


class SigningError(GoogleAuthError):
    """Raised when an access token cannot be obtained for a request."""

    pass
