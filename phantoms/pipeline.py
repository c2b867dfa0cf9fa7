"""
Leaderboard Pipeline

This module wires the data sources, the scoring aggregator and the cache
together:
1. Fetch pull requests (all pages, up to the page cap)
2. Load the events feed (never fails; an unavailable feed is empty)
3. Aggregate and rank contributors
4. Save the ranking to the cache slot

If the pull-request fetch fails, the last cached ranking is served
instead; with no cache the result is an empty, "unavailable" ranking.

Usage:
    python -m phantoms.pipeline
    OR
    from phantoms.pipeline import build_leaderboard
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import requests

from phantoms.cache import LeaderboardCache
from phantoms.config import REPO_OWNER, REPO_NAME
from phantoms.exceptions import PullRequestFetchError
from phantoms.ingestion.events_feed import load_events
from phantoms.ingestion.github_client import fetch_pull_requests, parse_pull_requests
from phantoms.scoring.aggregator import aggregate_contributors, leaderboard_dataframe
from phantoms.scoring.models import ContributorScore, EventRecord, ScoringConfig
from phantoms.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

SOURCE_LIVE = "live"
SOURCE_CACHED = "cached"
SOURCE_UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class LeaderboardResult:
    contributors: tuple[ContributorScore, ...]
    events: tuple[EventRecord, ...] = field(default_factory=tuple)
    source: str = SOURCE_LIVE
    error: str | None = None

    @property
    def is_cached(self) -> bool:
        return self.source == SOURCE_CACHED


def describe_fetch_error(error: Exception) -> str:
    """User-facing message for a failed pull-request fetch."""
    status = getattr(error, "status_code", None)
    text = str(error).lower()
    if status == 403 or "rate limit" in text:
        return "GitHub API rate limit exceeded. Please try again later."
    if status == 404:
        return "Repository not found or access denied."
    return "Data unavailable"


def build_leaderboard(
    owner: str = REPO_OWNER,
    repo: str = REPO_NAME,
    now: datetime | None = None,
    events_source=None,
    cache: LeaderboardCache | None = None,
    session: requests.Session | None = None,
    config: ScoringConfig | None = None,
) -> LeaderboardResult:
    """
    Build the contributor ranking, falling back to the cache on failure.

    Args:
        owner: Repository owner (also excluded from the ranking)
        repo: Repository name
        now: Evaluation time for the velocity window (default: current UTC)
        events_source: Events URL or path (default: bundled events file)
        cache: Cache slot (default: LeaderboardCache())
        session: requests.Session shared by both fetches
        config: Scoring constants

    Returns:
        LeaderboardResult with source "live", "cached" or "unavailable"
    """
    cache = cache or LeaderboardCache()
    now = now or datetime.now(timezone.utc)
    events = load_events(events_source, session=session)

    try:
        raw_pulls = fetch_pull_requests(owner, repo, session=session)
    except (PullRequestFetchError, requests.RequestException) as e:
        logger.warning(f"Leaderboard sync failed: {e}")
        message = describe_fetch_error(e)
        cached = cache.load()
        if cached is not None:
            logger.info("Serving cached leaderboard")
            return LeaderboardResult(tuple(cached), tuple(events), SOURCE_CACHED, message)
        return LeaderboardResult((), tuple(events), SOURCE_UNAVAILABLE, message)

    records = parse_pull_requests(raw_pulls)
    ranked = aggregate_contributors(records, events, owner, now=now, config=config)
    logger.info(f"Ranked {len(ranked)} contributors from {len(records)} pull requests")

    cache.save(ranked)
    return LeaderboardResult(tuple(ranked), tuple(events), SOURCE_LIVE)


def main():
    logger.info("=" * 60)
    logger.info(f"Building leaderboard for {REPO_OWNER}/{REPO_NAME}")
    logger.info("=" * 60)

    result = build_leaderboard()

    if result.source != SOURCE_LIVE:
        logger.warning(f"Source: {result.source} ({result.error})")

    if not result.contributors:
        logger.info("No active agents found.")
        return result

    df = leaderboard_dataframe(result.contributors)
    logger.info("Top 20 Contributors by XP:")
    logger.info("\n" + df.head(20).to_string(index=False))
    return result


if __name__ == "__main__":
    main()
