"""
Shared utilities for the Pixel Phantoms Command Center.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
import os
import re
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

from phantoms.config import LOG_LEVEL

# --- Shared Regex Patterns for Label Classification ---
# "level 3", "Level-3", "level_3", "LEVEL3" (case-insensitive substring match)
LEVEL3_RE = re.compile(r"level[\s_-]*3", re.IGNORECASE)
LEVEL2_RE = re.compile(r"level[\s_-]*2", re.IGNORECASE)
LEVEL1_RE = re.compile(r"level[\s_-]*1", re.IGNORECASE)

# Checked high to low; first hit wins
LEVEL_PATTERNS = (
    ("L3", LEVEL3_RE),
    ("L2", LEVEL2_RE),
    ("L1", LEVEL1_RE),
)


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: config.LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Parsing Helpers ---
def parse_timestamp(value) -> datetime | None:
    """
    Parse an ISO 8601 timestamp as returned by the GitHub API.

    Naive values are assumed to be UTC. Returns None for empty or
    unparsable input instead of raising.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_calendar_date(value) -> date | None:
    """Parse 'YYYY-MM-DD' (or a full ISO timestamp) into a date, or None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def classify_label_level(labels) -> str | None:
    """
    Return the highest complexity level ("L3", "L2", "L1") named by any label.

    Matching is a case-insensitive substring search. Returns None when no
    label names a level.
    """
    for level, pattern in LEVEL_PATTERNS:
        if any(pattern.search(label) for label in labels):
            return level
    return None


# --- File Operations ---
def atomic_write_text(text: str, path: Path) -> None:
    """
    Write text to a file atomically using a temporary file.

    This prevents a half-written file if the write is interrupted.

    Args:
        text: Content to write
        path: Destination path
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix='.tmp',
            dir=path.parent  # Same filesystem for atomic replace
        ) as tmp:
            tmp.write(text)
            tmp_path = Path(tmp.name)

        os.replace(tmp_path, path)
        logger.debug(f"Atomically wrote {len(text)} chars to {path}")

    except Exception:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


# --- Validation ---
def validate_positive(name: str, value: int) -> None:
    """
    Validate that a numeric setting is at least 1.

    Raises:
        ValueError: If value is below 1
    """
    if value < 1:
        raise ValueError(f"Invalid {name}: {value}. Must be >= 1")


__all__ = [
    # Logging
    'setup_logging',
    # Parsing
    'parse_timestamp',
    'parse_calendar_date',
    'classify_label_level',
    # File operations
    'atomic_write_text',
    # Validation
    'validate_positive',
    # Label classification
    'LEVEL1_RE',
    'LEVEL2_RE',
    'LEVEL3_RE',
    'LEVEL_PATTERNS',
]
