"""Google Calendar API client implementation.

Talks to the Calendar v3 REST API directly over httpx, signing every request
with a service account token. Each operation is a single request/response
exchange with no retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from calendar_api.calendar.exceptions import ApiError, TransportError, ValidationError
from calendar_api.calendar.models import DeleteResult, EventDraft, FreeBusyQuery
from calendar_api.config import CALENDAR_API_URL, ClientConfig
from calendar_api.google import ServiceAccountSigner, SigningError

logger = logging.getLogger(__name__)

QueryValue = str | int | float | bool | list[str | int | float]


class CalendarClient:
    """Google Calendar API client with service account authentication.

    Manages bookings on calendars shared with the service account.

    Usage:
        config = ClientConfig(
            service_account_email="booking@project.iam.gserviceaccount.com",
            key_file="service_account_key.json",
            timezone="Asia/Singapore",
        )
        with CalendarClient(config) as client:
            events = client.list_events("team@group.calendar.google.com", {"q": "standup"})
            busy = client.check_busy_period(
                "team@group.calendar.google.com",
                "2016-04-29T14:00:00+08:00",
                "2016-04-29T18:00:00+08:00",
            )

    The client holds no per-call state and may be shared between threads.
    Every operation accepts a `timeout` overriding the client default.
    """

    def __init__(
        self,
        config: ClientConfig,
        timeout: float | httpx.Timeout | None = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Calendar client.

        Args:
            config: Service account identity, key source and timezone.
            timeout: Default timeout in seconds for every request.
            transport: Optional httpx transport, e.g. for proxies or tests.
        """
        self.config = config
        self.base_url = CALENDAR_API_URL
        self._signer = ServiceAccountSigner(config)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @property
    def timezone(self) -> str:
        """Timezone sent with free/busy queries."""
        return self.config.timezone

    def _check_calendar_id(self, calendar_id: str | None, error_origin: str) -> None:
        if not calendar_id:
            raise ValidationError(
                f"{error_origin}: Missing calendarId argument; "
                "check that it is defined in params and settings"
            )

    def _events_path(self, calendar_id: str, event_id: str | None = None) -> str:
        path = f"/calendars/{quote(calendar_id, safe='@')}/events"
        if event_id is not None:
            path += f"/{quote(event_id, safe='')}"
        return path

    def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, QueryValue] | None = None,
        json: dict[str, Any] | None = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        """Make an authenticated API request.

        Args:
            method: HTTP method.
            path: API path below the base URL (e.g., "/freeBusy").
            params: Query parameters, passed through verbatim.
            json: JSON body for POST requests.
            timeout: Per-request timeout overriding the client default.

        Returns:
            The undecoded response.

        Raises:
            ConfigurationError: If the key material cannot be loaded.
            TransportError: If signing or sending the request fails.
        """
        url = f"{self.base_url}{path}"
        headers: dict[str, str] = {}

        try:
            self._signer.sign(method, url, headers)
        except SigningError as e:
            raise TransportError(str(e)) from e

        logger.debug(f"{method} {path}")
        try:
            response = self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    def _decode(self, response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON in response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e
        return self._expect_object(body, "response body", response)

    def _expect_object(self, value: Any, what: str, response: httpx.Response) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise ApiError(
                f"Unexpected {what}: expected a JSON object, got {type(value).__name__}",
                status_code=response.status_code,
                body=response.text,
            )
        return value

    # =========================================================================
    # Events
    # =========================================================================

    def list_events(
        self,
        calendar_id: str,
        params: Mapping[str, QueryValue] | None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> list[dict[str, Any]]:
        """List events on a calendar.

        Args:
            calendar_id: Calendar identifier.
            params: Query parameters from the events.list reference, e.g.
                timeMin and timeMax (RFC3339) or q for free-text search.
                Lists are sent as repeated keys. Pass {} for no filters.
            timeout: Per-request timeout overriding the client default.

        Returns:
            The event resources from the first page of results.

        Raises:
            ValidationError: If calendar_id or params is missing.
            ApiError: If the API does not answer 200.
            TransportError: If the request could not be completed.
        """
        self._check_calendar_id(calendar_id, "listEvents Error")
        if params is None:
            raise ValidationError("Missing argument; query terms needed")

        try:
            response = self._request(
                "GET", self._events_path(calendar_id), params=params, timeout=timeout
            )
            if response.status_code != 200:
                raise ApiError.from_response(response.status_code, response.text)
            body = self._decode(response)
        except ApiError as e:
            raise ApiError(
                f"ListEvents Error: {e}", status_code=e.status_code, body=e.body
            ) from e
        except TransportError as e:
            raise TransportError(f"ListEvents Error: {e}") from e

        return body.get("items", [])

    def insert_event(
        self,
        calendar_id: str,
        summary: str | None,
        start_date_time: str | None,
        end_date_time: str | None,
        location: str | None = None,
        status: str | None = None,
        description: str | None = None,
        color_id: str | None = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        """Insert an event on a calendar.

        Args:
            calendar_id: Calendar identifier.
            summary: Name shown as the event summary.
            start_date_time: Start in RFC3339, e.g. 2016-04-29T14:00:00+08:00.
            end_date_time: End in RFC3339, e.g. 2016-04-29T18:00:00+08:00.
            location: Location description.
            status: "confirmed", "tentative" or "cancelled".
            description: Event description.
            color_id: Event colour identifier.
            timeout: Per-request timeout overriding the client default.

        Returns:
            The raw response; read the created event from `response.json()`.

        Raises:
            ValidationError: If calendar_id is missing.
            ApiError: If the API does not answer 200.
            TransportError: If the request could not be completed.
        """
        self._check_calendar_id(calendar_id, "insertEvent Error")
        event = EventDraft(
            summary=summary,
            start_date_time=start_date_time,
            end_date_time=end_date_time,
            location=location,
            status=status,
            description=description,
            color_id=color_id,
        )

        response = self._request(
            "POST", self._events_path(calendar_id), json=event.to_body(), timeout=timeout
        )
        if response.status_code != 200:
            raise ApiError.from_response(response.status_code, response.text)
        return response

    def delete_event(
        self,
        calendar_id: str,
        event_id: str | None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> DeleteResult:
        """Delete an event.

        Deleting an event that is already gone is reported by the API as a
        non-204 status and raised as ApiError like any other failure.

        Raises:
            ValidationError: If calendar_id or event_id is missing.
            ApiError: If the API does not answer 204.
            TransportError: If the request could not be completed.
        """
        self._check_calendar_id(calendar_id, "deleteEvent Error")
        if not event_id:
            raise ValidationError("Missing argument; need to pass in eventId")

        response = self._request(
            "DELETE", self._events_path(calendar_id, event_id), timeout=timeout
        )
        if response.status_code != 204:
            raise ApiError.from_response(response.status_code, response.text)

        logger.info(f"Deleted event {event_id} from {calendar_id}")
        return DeleteResult(status_code=response.status_code, message="Event delete success")

    # =========================================================================
    # Free/busy
    # =========================================================================

    def check_busy_period(
        self,
        calendar_id: str,
        start_date_time: str,
        end_date_time: str,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> list[dict[str, str]]:
        """Check when a calendar is busy during a period.

        Args:
            calendar_id: Calendar identifier.
            start_date_time: Window start in RFC3339.
            end_date_time: Window end in RFC3339.
            timeout: Per-request timeout overriding the client default.

        Returns:
            Busy intervals as {"start": ..., "end": ...} dicts, in API order.

        Raises:
            ApiError: If the calendar cannot be read, e.g. it is not shared
                with the service account.
        """
        self._check_calendar_id(calendar_id, "checkBusyPeriod Error")
        query = FreeBusyQuery(
            time_min=start_date_time,
            time_max=end_date_time,
            timezone=self.timezone,
            calendar_ids=[calendar_id],
        )
        return self.query_free_busy(query, timeout=timeout)[calendar_id]

    def query_free_busy(
        self,
        query: FreeBusyQuery,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> dict[str, list[dict[str, str]]]:
        """Query busy intervals for several calendars at once.

        Args:
            query: Time window, timezone and calendar ids.
            timeout: Per-request timeout overriding the client default.

        Returns:
            Mapping of each queried calendar id to its busy intervals.

        Raises:
            ValidationError: If the query names no calendars or an empty id.
            ApiError: If the API does not answer 200, or a queried
                calendar is missing from the response or reports errors.
            TransportError: If the request could not be completed.
        """
        if not query.calendar_ids:
            raise ValidationError("queryFreeBusy Error: Missing calendar ids")
        for calendar_id in query.calendar_ids:
            self._check_calendar_id(calendar_id, "queryFreeBusy Error")

        response = self._request("POST", "/freeBusy", json=query.to_body(), timeout=timeout)
        if response.status_code != 200:
            raise ApiError.from_response(response.status_code, response.text)

        calendars = self._expect_object(
            self._decode(response).get("calendars"), "calendars", response
        )
        result: dict[str, list[dict[str, str]]] = {}
        for calendar_id in query.calendar_ids:
            if calendar_id not in calendars:
                raise ApiError(
                    f"{calendar_id}: missing from free/busy response",
                    status_code=response.status_code,
                    body=response.text,
                )
            data = self._expect_object(calendars[calendar_id], calendar_id, response)
            # An inaccessible calendar comes back with errors and no busy times
            if data.get("errors"):
                raise ApiError(
                    f"{calendar_id}: {data['errors']}",
                    status_code=response.status_code,
                    body=response.text,
                )
            result[calendar_id] = data.get("busy", [])
        return result

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
