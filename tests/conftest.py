"""
Shared fixtures for the scoring and pipeline tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from phantoms.scoring.models import EventRecord, PullRequestRecord

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_pr():
    """Build a PullRequestRecord merged `days_ago` days before NOW."""
    def _make(author, labels=(), days_ago=0, merged=True, created_hours_before=None):
        merged_at = NOW - timedelta(days=days_ago) if merged else None
        created_at = None
        if merged_at and created_hours_before is not None:
            created_at = merged_at - timedelta(hours=created_hours_before)
        return PullRequestRecord(
            author=author,
            merged_at=merged_at,
            labels=frozenset(labels),
            created_at=created_at,
        )
    return _make


@pytest.fixture
def make_events():
    def _make(count):
        return [
            EventRecord(title=f"Event {i}", date=NOW.date() + timedelta(days=i))
            for i in range(count)
        ]
    return _make


@pytest.fixture
def raw_pull():
    """Raw REST payload shaped like GitHub's /pulls response."""
    def _make(login, merged_at="2026-02-20T10:00:00Z", labels=(), created_at=None, number=1):
        return {
            "number": number,
            "user": {"login": login, "avatar_url": f"https://avatars.example/{login}"},
            "merged_at": merged_at,
            "created_at": created_at,
            "labels": [{"name": name} for name in labels],
        }
    return _make
