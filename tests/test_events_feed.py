"""
Tests for the events feed and listing helpers.
"""

import json
from datetime import date
from unittest.mock import MagicMock

import requests

from phantoms.ingestion.events_feed import (
    event_id,
    event_status,
    load_events,
    paginate_events,
    parse_event,
    parse_events,
    registration_available,
    split_events,
    unique_event_ids,
)
from phantoms.scoring.models import EventRecord

TODAY = date(2026, 3, 1)

RAW_EVENTS = [
    {
        "title": "Kickoff",
        "description": "Intro meetup",
        "date": "2026-01-10",
        "location": "Discord",
        "registrationOpen": True,
        "registrationLink": "https://example.com/kickoff",
    },
    {
        "title": "Sprint",
        "date": "2026-05-22",
        "registrationOpen": True,
        "registrationLink": "https://example.com/sprint",
    },
]


def event(title, day, open_=True, link="https://example.com"):
    return EventRecord(title=title, date=day, registration_open=open_, registration_link=link)


class TestParseEvent:
    """Tests for parse_event."""

    def test_full_record(self):
        record = parse_event(RAW_EVENTS[0])
        assert record.title == "Kickoff"
        assert record.date == date(2026, 1, 10)
        assert record.location == "Discord"
        assert record.registration_open is True

    def test_defaults(self):
        record = parse_event({"date": "2026-05-22"})
        assert record.title == "Untitled Event"
        assert record.location == "TBA"
        assert record.description == "Details coming soon."
        assert record.registration_open is False
        assert record.registration_link is None

    def test_datetime_string(self):
        assert parse_event({"date": "2026-05-22T18:00:00"}).date == date(2026, 5, 22)

    def test_missing_or_bad_date(self):
        assert parse_event({"title": "No date"}) is None
        assert parse_event({"date": "someday"}) is None
        assert parse_event(["not", "a", "dict"]) is None

    def test_parse_events_wrapped(self):
        assert len(parse_events({"events": RAW_EVENTS})) == 2

    def test_parse_events_not_a_list(self):
        assert parse_events("nope") == []


class TestLoadEvents:
    """Tests for load_events."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps(RAW_EVENTS), encoding="utf-8")

        events = load_events(path)
        assert [e.title for e in events] == ["Kickoff", "Sprint"]

    def test_missing_file_gives_empty(self, tmp_path):
        assert load_events(tmp_path / "missing.json") == []

    def test_corrupt_file_gives_empty(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_events(path) == []

    def test_from_url(self):
        response = MagicMock()
        response.json.return_value = RAW_EVENTS
        session = MagicMock()
        session.get.return_value = response

        events = load_events("https://example.com/events.json", session=session)

        assert len(events) == 2
        response.raise_for_status.assert_called_once()

    def test_url_failure_gives_empty(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")
        assert load_events("https://example.com/events.json", session=session) == []

    def test_url_error_status_gives_empty(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404")
        session = MagicMock()
        session.get.return_value = response
        assert load_events("https://example.com/events.json", session=session) == []

    def test_bundled_feed_loads(self):
        assert len(load_events()) > 0


class TestListingHelpers:
    """Tests for status, split, registration and pagination."""

    def test_event_status(self):
        assert event_status(event("a", date(2026, 2, 1)), TODAY) == "ended"
        assert event_status(event("b", TODAY), TODAY) == "today"
        assert event_status(event("c", date(2026, 4, 1)), TODAY) == "upcoming"

    def test_split_ordering(self):
        events = [
            event("late", date(2026, 6, 1)),
            event("old", date(2025, 12, 1)),
            event("soon", date(2026, 3, 5)),
            event("recent", date(2026, 2, 20)),
            event("today", TODAY),
        ]
        upcoming, past = split_events(events, TODAY)

        assert [e.title for e in upcoming] == ["today", "soon", "late"]
        assert [e.title for e in past] == ["recent", "old"]

    def test_registration_available(self):
        assert registration_available(event("a", TODAY), TODAY)
        assert not registration_available(event("a", date(2026, 2, 1)), TODAY)
        assert not registration_available(event("a", TODAY, open_=False), TODAY)
        assert not registration_available(event("a", TODAY, link=None), TODAY)

    def test_event_id_stable(self):
        first = event_id(event("a", TODAY))
        assert first == event_id(event("a", TODAY))
        assert first != event_id(event("b", TODAY))
        assert first.startswith("event-")

    def test_unique_ids_for_duplicate_entries(self):
        events = [event("a", TODAY), event("b", TODAY), event("a", TODAY), event("a", TODAY)]
        ids = unique_event_ids(events)

        assert len(set(ids)) == 4
        assert ids[0] == event_id(events[0])
        assert ids[1] == event_id(events[1])
        assert ids[2] == f"{ids[0]}-2"
        assert ids[3] == f"{ids[0]}-3"

    def test_paginate(self):
        events = [event(str(i), TODAY) for i in range(14)]

        page, total = paginate_events(events, 1, per_page=6)
        assert total == 3
        assert [e.title for e in page] == ["0", "1", "2", "3", "4", "5"]

        page, _ = paginate_events(events, 3, per_page=6)
        assert [e.title for e in page] == ["12", "13"]

    def test_paginate_clamps(self):
        events = [event(str(i), TODAY) for i in range(3)]
        assert paginate_events(events, 99, per_page=2)[0][0].title == "2"
        assert paginate_events(events, 0, per_page=2)[0][0].title == "0"

    def test_paginate_empty(self):
        assert paginate_events([], 1) == ([], 1)
