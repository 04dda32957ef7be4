"""Thin Google Calendar client for server-side booking systems."""

from calendar_api.calendar import (
    ApiError,
    CalendarClient,
    CalendarError,
    DeleteResult,
    EventDraft,
    FreeBusyQuery,
    TransportError,
    ValidationError,
)
from calendar_api.config import CALENDAR_SCOPE, ClientConfig
from calendar_api.google import ConfigurationError, CredentialsNotFoundError

__version__ = "0.1.0"

__all__ = [
    "CalendarClient",
    "ClientConfig",
    "CALENDAR_SCOPE",
    "EventDraft",
    "FreeBusyQuery",
    "DeleteResult",
    "CalendarError",
    "ValidationError",
    "ApiError",
    "TransportError",
    "ConfigurationError",
    "CredentialsNotFoundError",
]
