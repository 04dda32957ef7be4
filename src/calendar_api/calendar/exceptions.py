"""Google Calendar client exceptions.

`ValidationError` marks a caller bug and is never worth retrying.
`ApiError` and `TransportError` may be transient; retrying is the caller's
choice.
"""


class CalendarError(Exception):
    """Base exception for calendar operation errors."""

    pass


class ValidationError(CalendarError, ValueError):
    """Raised when a required argument is missing or empty."""

    pass


class ApiError(CalendarError):
    """Raised when the Calendar API answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "ApiError":
        """Build an error whose message carries the status code and raw body."""
        return cls(f"{status_code}:\n{body}", status_code=status_code, body=body)


class TransportError(CalendarError):
    """Raised when a request could not be signed, sent or answered."""

    pass
