"""
Leagues, Roster and Summary Statistics

Derived views over a finished ranking:
- XP leagues shown on the homepage widget
- Gold/silver/bronze roster buckets
- Headline figures (contributors, events, total mass, average velocity)
- Head-to-head comparison of two contributors
"""

from dataclasses import dataclass

from phantoms.config import (
    LEAGUE_GOLD_XP,
    LEAGUE_SILVER_XP,
    LEAGUE_BRONZE_XP,
    HOMEPAGE_TOP_N,
    ROSTER_GOLD_XP,
    ROSTER_SILVER_XP,
)


@dataclass(frozen=True)
class League:
    key: str
    name: str
    threshold: int
    color: str


LEAGUES = (
    League('gold', 'Gold Class', LEAGUE_GOLD_XP, '#FFD700'),
    League('silver', 'Silver Class', LEAGUE_SILVER_XP, '#C0C0C0'),
    League('bronze', 'Bronze Class', LEAGUE_BRONZE_XP, '#CD7F32'),
    League('rookie', 'Rookie Agent', 0, '#00aaff'),
)


@dataclass(frozen=True)
class LeaderboardSummary:
    total_contributors: int
    total_events: int
    total_pull_requests: int
    total_mass: int
    average_velocity: float


@dataclass(frozen=True)
class ContributorComparison:
    first: str
    second: str
    xp_difference: int
    pr_difference: int
    winner: str | None


def get_league_info(xp: int) -> League:
    """Highest league whose threshold the XP reaches."""
    for league in LEAGUES:
        if xp >= league.threshold:
            return league
    return LEAGUES[-1]


def roster_tier(xp: int) -> str:
    if xp >= ROSTER_GOLD_XP:
        return 'gold'
    elif xp >= ROSTER_SILVER_XP:
        return 'silver'
    return 'bronze'


def build_roster(ranked) -> dict[str, list[str]]:
    """Group contributor logins into roster tiers, keeping rank order."""
    roster = {'gold': [], 'silver': [], 'bronze': []}
    for contributor in ranked:
        roster[roster_tier(contributor.experience_points)].append(contributor.login)
    return roster


def top_contributors(ranked, limit: int = HOMEPAGE_TOP_N) -> list:
    return list(ranked)[:max(limit, 0)]


def summarize_leaderboard(ranked, events) -> LeaderboardSummary:
    """
    Headline figures for the dashboard header.

    Args:
        ranked: ContributorScores
        events: Event records

    Returns:
        LeaderboardSummary; average_velocity is 0.0 for an empty ranking
    """
    ranked = list(ranked)
    total_velocity = sum(c.velocity_score for c in ranked)
    return LeaderboardSummary(
        total_contributors=len(ranked),
        total_events=len(events or ()),
        total_pull_requests=sum(c.pull_request_count for c in ranked),
        total_mass=sum(c.mass_score for c in ranked),
        average_velocity=round(total_velocity / len(ranked), 2) if ranked else 0.0,
    )


def compare_contributors(first, second) -> ContributorComparison:
    """Compare two contributors by XP and PR count. Equal XP has no winner."""
    if first.experience_points > second.experience_points:
        winner = first.login
    elif second.experience_points > first.experience_points:
        winner = second.login
    else:
        winner = None

    return ContributorComparison(
        first=first.login,
        second=second.login,
        xp_difference=abs(first.experience_points - second.experience_points),
        pr_difference=abs(first.pull_request_count - second.pull_request_count),
        winner=winner,
    )
