"""
Contributor Scoring Aggregator

This module turns a list of pull requests and a list of events into a
ranked list of contributor summaries. It is a pure data transform:
- Merged, non-owner pull requests only
- Complexity classification from labels (Level 3 > Level 2 > Level 1)
- XP, mass and recency-weighted velocity accumulated per author
- Event participation estimated from PR volume
- Tier and status derived from the accumulated scores

Usage:
    from phantoms.scoring import aggregate_contributors
    ranked = aggregate_contributors(pull_requests, events, "owner", now=now)
"""

from datetime import datetime, timedelta, timezone

import pandas as pd

from phantoms.scoring.achievements import achievement_xp, evaluate_achievements
from phantoms.scoring.models import ContributorScore, ScoringConfig, coerce_pull_request
from phantoms.utils import classify_label_level, parse_timestamp, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

LEADERBOARD_COLUMNS = [
    'rank', 'login', 'experience_points', 'tier', 'status',
    'pull_request_count', 'event_count', 'mass_score', 'velocity_score',
]


def classify_pull_request(labels, config: ScoringConfig) -> tuple[str | None, int, int]:
    """
    Classify one pull request by its labels.

    Returns:
        Tuple of (level or None, xp awarded, mass gained)
    """
    level = classify_label_level(labels)
    key = level or "DEFAULT"
    return level, config.pr_points[key], config.pr_mass[key]


def is_recent(merged_at: datetime, now: datetime, window_days: int) -> bool:
    """True when merged_at falls inside the trailing window ending at now."""
    return merged_at > now - timedelta(days=window_days)


def estimate_event_participation(pr_count: int, total_events: int, prs_per_event: int) -> int:
    """
    Proxy for events attended: one event per prs_per_event merged PRs,
    capped at the number of events on record.
    """
    return min(pr_count // prs_per_event, total_events)


def derive_tier(mass: int, velocity: int, events: int, config: ScoringConfig) -> str:
    """Mass is checked first, then velocity, then events."""
    if mass > config.titan_min_mass:
        return 'TITAN'
    elif velocity > config.striker_min_velocity:
        return 'STRIKER'
    elif events > config.scout_min_events:
        return 'SCOUT'
    return 'ROOKIE'


def derive_status(velocity: int, config: ScoringConfig) -> str:
    if velocity > config.overdrive_min_velocity:
        return 'OVERDRIVE'
    elif velocity > config.online_min_velocity:
        return 'ONLINE'
    return 'IDLE'


def _new_entry(avatar_url):
    return {
        'xp': 0,
        'mass': 0,
        'velocity': 0,
        'events': 0,
        'pr_count': 0,
        'avatar_url': avatar_url,
        'pull_requests': [],
        'levels': [],
    }


def aggregate_contributors(
    pull_requests,
    events,
    repository_owner: str,
    now: datetime | None = None,
    config: ScoringConfig | None = None,
) -> list[ContributorScore]:
    """
    Score and rank contributors.

    Args:
        pull_requests: PullRequestRecords (or mappings with the same fields)
        events: Event records; only their count is used
        repository_owner: Login excluded from the ranking (case-insensitive)
        now: Evaluation time for the velocity window (default: current UTC time)
        config: Scoring constants (default: ScoringConfig())

    Returns:
        ContributorScores sorted by experience_points descending. Authors
        with equal XP keep the order in which they were first seen.
    """
    config = config or ScoringConfig()
    now = parse_timestamp(now) or datetime.now(timezone.utc)
    owner = (repository_owner or "").lower()
    total_events = len(events or ())

    user_map = {}
    skipped = 0

    # A. Pull requests
    for raw in pull_requests or ():
        pr = coerce_pull_request(raw)
        if pr is None:
            skipped += 1
            continue
        if not pr.is_merged:
            continue
        if pr.author.lower() == owner:
            continue

        merged_at = parse_timestamp(pr.merged_at)
        entry = user_map.get(pr.author)
        if entry is None:
            entry = user_map[pr.author] = _new_entry(pr.avatar_url)

        level, points, mass = classify_pull_request(pr.labels, config)
        entry['xp'] += points
        entry['mass'] += mass
        entry['pr_count'] += 1
        entry['pull_requests'].append(pr)
        entry['levels'].append(level)

        if is_recent(merged_at, now, config.velocity_window_days):
            entry['velocity'] += config.velocity_per_recent_pr

    if skipped:
        logger.debug(f"Skipped {skipped} malformed pull request records")

    # B. Event participation (estimated from PR activity)
    for entry in user_map.values():
        participation = estimate_event_participation(
            entry['pr_count'], total_events, config.prs_per_event
        )
        entry['events'] += participation
        entry['xp'] += participation * config.event_attendance_xp
        entry['mass'] += participation * config.event_mass
        entry['velocity'] += participation * config.event_velocity

        entry['achievements'] = evaluate_achievements(
            entry['pull_requests'],
            entry['levels'],
            entry['events'],
            consistency_min_days=config.consistency_min_days,
            speed_demon_max_hours=config.speed_demon_max_hours,
        )
        if config.use_achievement_bonus:
            entry['xp'] += achievement_xp(entry['achievements'])

    # C. Sort (stable) and assign rank, tier, status
    ordered = sorted(user_map.items(), key=lambda item: item[1]['xp'], reverse=True)

    ranked = []
    for index, (login, entry) in enumerate(ordered):
        ranked.append(ContributorScore(
            login=login,
            experience_points=entry['xp'],
            mass_score=entry['mass'],
            velocity_score=entry['velocity'],
            pull_request_count=entry['pr_count'],
            event_count=entry['events'],
            rank=index + 1,
            tier=derive_tier(entry['mass'], entry['velocity'], entry['events'], config),
            status=derive_status(entry['velocity'], config),
            avatar_url=entry['avatar_url'],
            achievements=entry['achievements'],
        ))

    logger.debug(f"Ranked {len(ranked)} contributors against {total_events} events")
    return ranked


def leaderboard_dataframe(ranked) -> pd.DataFrame:
    """
    Tabular view of a ranking for display.

    Args:
        ranked: ContributorScores as returned by aggregate_contributors

    Returns:
        DataFrame with LEADERBOARD_COLUMNS, one row per contributor
    """
    rows = [c.to_dict() for c in ranked]
    if not rows:
        return pd.DataFrame(columns=LEADERBOARD_COLUMNS)
    df = pd.DataFrame(rows)
    return df[LEADERBOARD_COLUMNS].reset_index(drop=True)
