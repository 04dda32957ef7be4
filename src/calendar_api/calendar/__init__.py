"""Google Calendar API client with service account authentication.

Book, list and remove calendar events from server-side code.

Usage:
    from calendar_api.calendar import CalendarClient
    from calendar_api.config import ClientConfig

    config = ClientConfig(
        service_account_email="booking@project.iam.gserviceaccount.com",
        key_file="service_account_key.json",
        timezone="Asia/Singapore",
    )
    client = CalendarClient(config)

    # List events in a window
    events = client.list_events(
        "team@group.calendar.google.com",
        {"timeMin": "2016-04-29T00:00:00+08:00", "timeMax": "2016-04-30T00:00:00+08:00"},
    )

    # Book a tentative slot
    response = client.insert_event(
        "team@group.calendar.google.com",
        "Queue slot",
        "2016-04-29T14:00:00+08:00",
        "2016-04-29T15:00:00+08:00",
        status="tentative",
    )
    event_id = response.json()["id"]

Setup:
    1. Create a service account and download its key from Google Cloud Console
    2. Share the calendar with the service account email
"""

from __future__ import annotations

from calendar_api.calendar.client import CalendarClient
from calendar_api.calendar.exceptions import (
    ApiError,
    CalendarError,
    TransportError,
    ValidationError,
)
from calendar_api.calendar.models import DeleteResult, EventDraft, FreeBusyQuery

__all__ = [
    "CalendarClient",
    "EventDraft",
    "FreeBusyQuery",
    "DeleteResult",
    "CalendarError",
    "ValidationError",
    "ApiError",
    "TransportError",
]
