"""
Events Feed

This module loads the community events list (a static JSON resource) and
provides the listing helpers the events page needs: status against today,
upcoming/past split, registration availability and pagination.

A feed that cannot be fetched or parsed yields an empty list; it is never
an error for callers.

Usage:
    from phantoms.ingestion.events_feed import load_events
    events = load_events()                       # bundled data/events.json
    events = load_events("https://.../events.json")
"""

import hashlib
import json
import math
from datetime import date
from pathlib import Path

import requests

from phantoms.config import EVENTS_DATA_FILE, EVENTS_PER_PAGE, REQUEST_TIMEOUT
from phantoms.scoring.models import EventRecord
from phantoms.utils import parse_calendar_date, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def parse_event(raw) -> EventRecord | None:
    """
    Convert one raw event dict into an EventRecord.

    Returns:
        EventRecord, or None when the date is missing or invalid
    """
    if not isinstance(raw, dict):
        return None

    event_date = parse_calendar_date(raw.get("date"))
    if event_date is None:
        return None

    return EventRecord(
        title=raw.get("title") or "Untitled Event",
        date=event_date,
        location=raw.get("location") or "TBA",
        description=raw.get("description") or "Details coming soon.",
        registration_open=bool(raw.get("registrationOpen", False)),
        registration_link=raw.get("registrationLink") or None,
    )


def parse_events(raws) -> list[EventRecord]:
    if isinstance(raws, dict) and "events" in raws:
        raws = raws["events"]
    if not isinstance(raws, list):
        return []

    events = []
    for raw in raws:
        event = parse_event(raw)
        if event is None:
            logger.debug(f"Skipping malformed event: {str(raw)[:80]}")
            continue
        events.append(event)
    return events


def _read_source(source, session):
    text_source = str(source)
    if text_source.startswith(("http://", "https://")):
        http = session or requests.Session()
        response = http.get(text_source, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()

    with open(Path(source), encoding="utf-8") as f:
        return json.load(f)


def load_events(source=None, session: requests.Session | None = None) -> list[EventRecord]:
    """
    Load events from a URL or a local JSON file.

    Args:
        source: http(s) URL or filesystem path (default: config.EVENTS_DATA_FILE)
        session: requests.Session for URL sources

    Returns:
        List of EventRecords; empty on any fetch or parse failure
    """
    source = source or EVENTS_DATA_FILE
    try:
        raw = _read_source(source, session)
    except (requests.RequestException, OSError, ValueError) as e:
        logger.warning(f"Failed to load events from {source}: {e}")
        return []

    events = parse_events(raw)
    logger.info(f"Loaded {len(events)} events from {source}")
    return events


# --- Listing Helpers ---
def event_status(event: EventRecord, today: date) -> str:
    """One of 'ended', 'today', 'upcoming'."""
    if event.date < today:
        return 'ended'
    if event.date == today:
        return 'today'
    return 'upcoming'


def split_events(events, today: date) -> tuple[list[EventRecord], list[EventRecord]]:
    """
    Split into upcoming (soonest first) and past (most recent first).

    An event dated today counts as upcoming.
    """
    upcoming = sorted((e for e in events if e.date >= today), key=lambda e: e.date)
    past = sorted((e for e in events if e.date < today), key=lambda e: e.date, reverse=True)
    return upcoming, past


def registration_available(event: EventRecord, today: date) -> bool:
    return bool(event.registration_open and event.registration_link and event.date >= today)


def event_id(event: EventRecord) -> str:
    """Stable identifier derived from title, date and location."""
    base = f"{event.title}|{event.date.isoformat()}|{event.location}"
    return "event-" + hashlib.sha1(base.encode("utf-8")).hexdigest()[:12]


def unique_event_ids(events) -> list[str]:
    """
    One identifier per event, in order, with no repeats.

    Entries sharing title, date and location get a numeric suffix
    (-2, -3, ...) after the first occurrence.
    """
    seen = {}
    ids = []
    for event in events:
        base = event_id(event)
        seen[base] = seen.get(base, 0) + 1
        ids.append(base if seen[base] == 1 else f"{base}-{seen[base]}")
    return ids


def paginate_events(events, page: int, per_page: int = EVENTS_PER_PAGE) -> tuple[list[EventRecord], int]:
    """
    Slice one page of events.

    Args:
        events: Event list
        page: 1-based page number; clamped into range
        per_page: Events per page

    Returns:
        Tuple of (events on the page, total pages). Total pages is at least 1.
    """
    events = list(events)
    total_pages = max(1, math.ceil(len(events) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return events[start:start + per_page], total_pages

