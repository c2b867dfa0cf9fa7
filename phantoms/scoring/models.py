"""
Scoring Data Model

Immutable records consumed and produced by the scoring aggregator:
- PullRequestRecord: one pull request from the source-control host
- EventRecord: one community event from the events feed
- ContributorScore: one ranked contributor summary
- ScoringConfig: every constant the aggregator reads
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime

from phantoms.config import (
    PR_POINTS,
    PR_MASS,
    VELOCITY_WINDOW_DAYS,
    VELOCITY_PER_RECENT_PR,
    PRS_PER_EVENT,
    EVENT_ATTENDANCE_XP,
    EVENT_MASS,
    EVENT_VELOCITY,
    TITAN_MIN_MASS,
    STRIKER_MIN_VELOCITY,
    SCOUT_MIN_EVENTS,
    OVERDRIVE_MIN_VELOCITY,
    ONLINE_MIN_VELOCITY,
    USE_ACHIEVEMENT_BONUS,
    CONSISTENCY_MIN_DAYS,
    SPEED_DEMON_MAX_HOURS,
)
from phantoms.utils import parse_timestamp


@dataclass(frozen=True)
class PullRequestRecord:
    author: str
    merged_at: datetime | None
    labels: frozenset[str] = field(default_factory=frozenset)
    avatar_url: str | None = None
    number: int | None = None
    created_at: datetime | None = None

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None


@dataclass(frozen=True)
class EventRecord:
    title: str
    date: date
    location: str = "TBA"
    description: str = "Details coming soon."
    registration_open: bool = False
    registration_link: str | None = None


@dataclass(frozen=True)
class ContributorScore:
    login: str
    experience_points: int
    mass_score: int
    velocity_score: int
    pull_request_count: int
    event_count: int
    rank: int
    tier: str
    status: str
    avatar_url: str | None = None
    achievements: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Plain-dict form used by the cache and the dashboard."""
        data = asdict(self)
        data['achievements'] = list(self.achievements)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ContributorScore":
        """
        Rebuild a contributor from its dict form.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a numeric field is not an integer
        """
        return cls(
            login=str(data['login']),
            experience_points=int(data['experience_points']),
            mass_score=int(data['mass_score']),
            velocity_score=int(data['velocity_score']),
            pull_request_count=int(data['pull_request_count']),
            event_count=int(data['event_count']),
            rank=int(data['rank']),
            tier=str(data['tier']),
            status=str(data['status']),
            avatar_url=data.get('avatar_url'),
            achievements=tuple(data.get('achievements') or ()),
        )


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring constants, frozen so one run cannot drift from another."""
    pr_points: dict = field(default_factory=lambda: dict(PR_POINTS))
    pr_mass: dict = field(default_factory=lambda: dict(PR_MASS))
    velocity_window_days: int = VELOCITY_WINDOW_DAYS
    velocity_per_recent_pr: int = VELOCITY_PER_RECENT_PR
    prs_per_event: int = PRS_PER_EVENT
    event_attendance_xp: int = EVENT_ATTENDANCE_XP
    event_mass: int = EVENT_MASS
    event_velocity: int = EVENT_VELOCITY
    titan_min_mass: int = TITAN_MIN_MASS
    striker_min_velocity: int = STRIKER_MIN_VELOCITY
    scout_min_events: int = SCOUT_MIN_EVENTS
    overdrive_min_velocity: int = OVERDRIVE_MIN_VELOCITY
    online_min_velocity: int = ONLINE_MIN_VELOCITY
    use_achievement_bonus: bool = USE_ACHIEVEMENT_BONUS
    consistency_min_days: int = CONSISTENCY_MIN_DAYS
    speed_demon_max_hours: int = SPEED_DEMON_MAX_HOURS


def coerce_pull_request(value) -> PullRequestRecord | None:
    """
    Accept either a PullRequestRecord or a loose mapping.

    Mappings use the record's field names (author, merged_at, labels, ...).
    Both forms are normalized the same way: timestamps are parsed (an
    unparsable merge date means unmerged) and a bare label string is one
    label. Returns None when the author is missing or blank.
    """
    if isinstance(value, PullRequestRecord):
        value = asdict(value)
    if not isinstance(value, dict):
        return None

    author = value.get('author')
    if not author or not str(author).strip():
        return None

    labels = value.get('labels') or ()
    if isinstance(labels, str):
        labels = (labels,)
    return PullRequestRecord(
        author=str(author),
        merged_at=parse_timestamp(value.get('merged_at')),
        labels=frozenset(str(label) for label in labels),
        avatar_url=value.get('avatar_url'),
        number=value.get('number'),
        created_at=parse_timestamp(value.get('created_at')),
    )
