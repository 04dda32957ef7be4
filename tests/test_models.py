"""Tests for calendar request bodies."""

from calendar_api import EventDraft, FreeBusyQuery


class TestEventDraft:
    """Test event body construction."""

    def test_full_body(self):
        """Should map every field to its API name."""
        draft = EventDraft(
            summary="Queue slot",
            start_date_time="2016-04-29T14:00:00+08:00",
            end_date_time="2016-04-29T15:00:00+08:00",
            location="Clinic 3",
            status="confirmed",
            description="Walk-in queue",
            color_id="11",
        )
        assert draft.to_body() == {
            "start": {"dateTime": "2016-04-29T14:00:00+08:00"},
            "end": {"dateTime": "2016-04-29T15:00:00+08:00"},
            "location": "Clinic 3",
            "summary": "Queue slot",
            "status": "confirmed",
            "description": "Walk-in queue",
            "colorId": "11",
        }

    def test_unset_fields_are_omitted(self):
        """Should leave out fields that were not given."""
        draft = EventDraft(start_date_time="t1", end_date_time="t2")
        assert draft.to_body() == {"start": {"dateTime": "t1"}, "end": {"dateTime": "t2"}}

    def test_status_is_not_validated(self):
        """Should pass unknown statuses through unchanged."""
        assert EventDraft(status="on-hold").to_body() == {"status": "on-hold"}


class TestFreeBusyQuery:
    """Test free/busy body construction."""

    def test_body_keeps_calendar_order(self):
        """Should list calendars in the order given."""
        query = FreeBusyQuery(
            time_min="t1",
            time_max="t2",
            timezone="Asia/Singapore",
            calendar_ids=["b", "a"],
        )
        assert query.to_body() == {
            "timeMin": "t1",
            "timeMax": "t2",
            "timeZone": "Asia/Singapore",
            "items": [{"id": "b"}, {"id": "a"}],
        }
