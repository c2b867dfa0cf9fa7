"""
Leaderboard Cache

A single best-effort cache slot holding the most recent successful
ranking as JSON text. It is written after every successful aggregation
and read only when the live fetch fails. Cache problems are logged and
never propagate to the caller.
"""

import json
from pathlib import Path

from phantoms.config import CACHE_FILE
from phantoms.exceptions import CacheError
from phantoms.scoring.models import ContributorScore
from phantoms.utils import atomic_write_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def serialize_ranking(ranked) -> str:
    return json.dumps([c.to_dict() for c in ranked], indent=2)


def deserialize_ranking(text: str) -> list[ContributorScore]:
    """
    Parse cached JSON back into ContributorScores.

    Raises:
        CacheError: If the text is not a list of valid contributor dicts
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise CacheError(f"Cache is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CacheError(f"Cache holds {type(data).__name__}, expected list")

    try:
        return [ContributorScore.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise CacheError(f"Cache entry is malformed: {e}") from e


class LeaderboardCache:
    """Single-slot file cache for the last successful ranking."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else CACHE_FILE

    def load(self) -> list[ContributorScore] | None:
        """Return the cached ranking, or None if absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            ranked = deserialize_ranking(self.path.read_text(encoding="utf-8"))
        except (OSError, CacheError) as e:
            logger.warning(f"Ignoring unreadable cache {self.path}: {e}")
            return None
        logger.info(f"Loaded {len(ranked)} contributors from cache")
        return ranked

    def save(self, ranked) -> bool:
        """Overwrite the cache slot. Returns False if the write failed."""
        try:
            atomic_write_text(serialize_ranking(ranked), self.path)
        except OSError as e:
            logger.warning(f"Could not write cache {self.path}: {e}")
            return False
        logger.debug(f"Cached {len(ranked)} contributors to {self.path}")
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
