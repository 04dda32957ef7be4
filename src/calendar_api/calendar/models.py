"""Request and result types for the Google Calendar client."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class EventDraft:
    """An event to be inserted into a calendar.

    Fields left as None are omitted from the request body. `status` is one of
    "confirmed", "tentative" or "cancelled" but is passed through unchecked.
    """

    summary: str | None = None
    start_date_time: str | None = None
    end_date_time: str | None = None
    location: str | None = None
    status: str | None = None
    description: str | None = None
    color_id: str | None = None

    def to_body(self) -> dict[str, Any]:
        """Build the JSON body for an events insert request."""
        body: dict[str, Any] = {}
        if self.start_date_time is not None:
            body["start"] = {"dateTime": self.start_date_time}
        if self.end_date_time is not None:
            body["end"] = {"dateTime": self.end_date_time}

        optional = {
            "location": self.location,
            "summary": self.summary,
            "status": self.status,
            "description": self.description,
            "colorId": self.color_id,
        }
        body.update({key: value for key, value in optional.items() if value is not None})
        return body


@dataclass
class FreeBusyQuery:
    """A free/busy request for one or more calendars over a time window."""

    time_min: str
    time_max: str
    timezone: str
    calendar_ids: Sequence[str] = field(default_factory=list)

    def to_body(self) -> dict[str, Any]:
        """Build the JSON body for a freeBusy request."""
        return {
            "timeMin": self.time_min,
            "timeMax": self.time_max,
            "timeZone": self.timezone,
            "items": [{"id": calendar_id} for calendar_id in self.calendar_ids],
        }


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a successful event deletion."""

    status_code: int
    message: str
