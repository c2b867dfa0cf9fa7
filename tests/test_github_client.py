"""
Tests for the GitHub pull-request client.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from phantoms.exceptions import PullRequestFetchError
from phantoms.ingestion.github_client import (
    build_headers,
    fetch_pull_requests,
    parse_pull_request,
    parse_pull_requests,
)


def make_response(payload=None, status=200, reason="OK"):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.reason = reason
    response.json.return_value = payload
    return response


def make_session(*responses):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


class TestFetchPullRequests:
    """Tests for paginated fetching."""

    def test_stops_on_empty_page(self, raw_pull):
        session = make_session(
            make_response([raw_pull("a"), raw_pull("b")]),
            make_response([]),
        )
        pulls = fetch_pull_requests("owner", "repo", session=session)

        assert len(pulls) == 2
        assert session.get.call_count == 2

    def test_page_cap(self, raw_pull):
        session = make_session(*[make_response([raw_pull(f"u{i}")]) for i in range(5)])
        pulls = fetch_pull_requests("owner", "repo", session=session, max_pages=3)

        assert len(pulls) == 3
        assert session.get.call_count == 3

    def test_query_parameters(self, raw_pull):
        session = make_session(make_response([]))
        fetch_pull_requests("owner", "repo", session=session)

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.github.com/repos/owner/repo/pulls"
        assert kwargs["params"] == {"state": "all", "per_page": 100, "page": 1}
        assert "timeout" in kwargs

    def test_pages_requested_in_sequence(self, raw_pull):
        session = make_session(
            make_response([raw_pull("a")]),
            make_response([raw_pull("b")]),
            make_response([]),
        )
        fetch_pull_requests("owner", "repo", session=session)

        pages = [call.kwargs["params"]["page"] for call in session.get.call_args_list]
        assert pages == [1, 2, 3]

    def test_strict_raises_on_error_status(self):
        session = make_session(make_response(status=403, reason="Forbidden"))

        with pytest.raises(PullRequestFetchError) as exc_info:
            fetch_pull_requests("owner", "repo", session=session)

        assert exc_info.value.status_code == 403
        assert "403" in str(exc_info.value)

    def test_strict_raises_on_later_page(self, raw_pull):
        session = make_session(
            make_response([raw_pull("a")]),
            make_response(status=500, reason="Server Error"),
        )
        with pytest.raises(PullRequestFetchError):
            fetch_pull_requests("owner", "repo", session=session)

    def test_lenient_keeps_collected_pages(self, raw_pull):
        session = make_session(
            make_response([raw_pull("a")]),
            make_response(status=500, reason="Server Error"),
        )
        pulls = fetch_pull_requests("owner", "repo", session=session, strict=False)

        assert len(pulls) == 1
        assert session.get.call_count == 2

    def test_transport_error_strict(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")

        with pytest.raises(PullRequestFetchError) as exc_info:
            fetch_pull_requests("owner", "repo", session=session)
        assert exc_info.value.status_code is None

    def test_transport_error_lenient(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")

        assert fetch_pull_requests("owner", "repo", session=session, strict=False) == []

    def test_non_list_payload(self):
        session = make_session(make_response({"message": "Bad credentials"}))
        with pytest.raises(PullRequestFetchError):
            fetch_pull_requests("owner", "repo", session=session)

    def test_invalid_page_settings(self):
        with pytest.raises(ValueError):
            fetch_pull_requests("owner", "repo", session=MagicMock(), max_pages=0)


class TestHeaders:
    """Tests for request headers."""

    def test_anonymous(self):
        headers = build_headers(None)
        assert "Authorization" not in headers
        assert headers["Accept"] == "application/vnd.github+json"

    def test_token(self):
        assert build_headers("abc")["Authorization"] == "Bearer abc"


class TestParsePullRequest:
    """Tests for payload parsing."""

    def test_full_payload(self, raw_pull):
        record = parse_pull_request(raw_pull(
            "alice",
            merged_at="2026-02-20T10:00:00Z",
            labels=["Level 2", "frontend"],
            created_at="2026-02-19T10:00:00Z",
            number=42,
        ))

        assert record.author == "alice"
        assert record.merged_at == datetime(2026, 2, 20, 10, 0, tzinfo=timezone.utc)
        assert record.labels == frozenset({"Level 2", "frontend"})
        assert record.number == 42
        assert record.avatar_url == "https://avatars.example/alice"
        assert record.created_at == datetime(2026, 2, 19, 10, 0, tzinfo=timezone.utc)

    def test_unmerged(self, raw_pull):
        record = parse_pull_request(raw_pull("alice", merged_at=None))
        assert record.merged_at is None
        assert not record.is_merged

    def test_missing_user(self):
        assert parse_pull_request({"merged_at": "2026-02-20T10:00:00Z"}) is None
        assert parse_pull_request({"user": None}) is None
        assert parse_pull_request({"user": {"login": ""}}) is None

    def test_missing_labels(self):
        record = parse_pull_request({"user": {"login": "alice"}, "merged_at": None})
        assert record.labels == frozenset()

    def test_not_a_dict(self):
        assert parse_pull_request("garbage") is None

    def test_parse_many_skips_malformed(self, raw_pull):
        records = parse_pull_requests([raw_pull("a"), {"user": None}, "x", raw_pull("b")])
        assert [r.author for r in records] == ["a", "b"]
