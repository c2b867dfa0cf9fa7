"""
Achievement System

Badges a contributor unlocks from their merged pull requests and
(proxy) event participation. Two catalog entries describe activity the
pull-request feed does not report (review comments, event hosting); they
are listed for display and never awarded.
"""

from dataclasses import dataclass
from datetime import timedelta

from phantoms.config import CONSISTENCY_MIN_DAYS, SPEED_DEMON_MAX_HOURS


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    xp: int


ACHIEVEMENTS = (
    Achievement('first_pr', 'First PR', 'Submitted your first pull request', 100),
    Achievement('ten_prs', 'PR Master', 'Submitted 10 pull requests', 500),
    Achievement('high_complexity', 'Complex Solver', 'Submitted a Level 3 PR', 300),
    Achievement('consistent_contributor', 'Consistent Contributor', 'Active for 30 days', 400),
    Achievement('team_player', 'Team Player', 'Participated in 3 events', 250),
    Achievement('speed_demon', 'Speed Demon', 'Merged PR within 24 hours', 200),
    Achievement('quality_assurance', 'Quality Assurance', 'PR with no review comments', 150),
    Achievement('community_leader', 'Community Leader', 'Hosted an event', 1000),
)

ACHIEVEMENT_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def evaluate_achievements(
    pull_requests,
    levels,
    event_count: int,
    consistency_min_days: int = CONSISTENCY_MIN_DAYS,
    speed_demon_max_hours: int = SPEED_DEMON_MAX_HOURS,
) -> tuple[str, ...]:
    """
    Work out which achievements one contributor has unlocked.

    Args:
        pull_requests: The contributor's qualifying (merged) PullRequestRecords
        levels: Complexity level per PR ("L3", "L2", "L1" or None), same order
        event_count: Proxy event participation
        consistency_min_days: Span between first and last merge for the badge
        speed_demon_max_hours: Max open-to-merge time for the badge

    Returns:
        Achievement ids, in catalog order
    """
    pr_count = len(pull_requests)
    unlocked = set()

    if pr_count >= 1:
        unlocked.add('first_pr')
    if pr_count >= 10:
        unlocked.add('ten_prs')
    if 'L3' in levels:
        unlocked.add('high_complexity')

    merge_times = sorted(pr.merged_at for pr in pull_requests if pr.merged_at)
    if merge_times and merge_times[-1] - merge_times[0] >= timedelta(days=consistency_min_days):
        unlocked.add('consistent_contributor')

    if event_count >= 3:
        unlocked.add('team_player')

    fast_limit = timedelta(hours=speed_demon_max_hours)
    for pr in pull_requests:
        if pr.created_at and pr.merged_at and pr.merged_at - pr.created_at <= fast_limit:
            unlocked.add('speed_demon')
            break

    return tuple(a.id for a in ACHIEVEMENTS if a.id in unlocked)


def achievement_xp(achievement_ids) -> int:
    """Total XP bonus for a set of achievement ids."""
    return sum(ACHIEVEMENT_BY_ID[a].xp for a in achievement_ids if a in ACHIEVEMENT_BY_ID)
