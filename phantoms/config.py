"""
Central configuration for the Pixel Phantoms Command Center.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

import logging
import os
from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
CACHE_FOLDER = DATA_FOLDER / "cache"

# --- Repository Configuration ---
REPO_OWNER = os.environ.get("PHANTOMS_REPO_OWNER", "sayeeg-11")
REPO_NAME = os.environ.get("PHANTOMS_REPO_NAME", "Pixel_Phantoms")
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN") or None

# --- Data Sources ---
API_BASE = "https://api.github.com"
EVENTS_DATA_FILE = DATA_FOLDER / "events.json"

# Pull-request pagination (3 pages x 100 keeps us clear of the anonymous rate limit)
MAX_PR_PAGES = 3
PR_PER_PAGE = 100
REQUEST_TIMEOUT = 15  # seconds per request

# --- Cache ---
CACHE_FILE = CACHE_FOLDER / "leaderboard_data.json"

# --- Scoring Matrix ---
# XP awarded per merged PR, by complexity label
PR_POINTS = {
    "L3": 1100,  # High complexity
    "L2": 500,   # Medium complexity
    "L1": 200,   # Low complexity
    "DEFAULT": 100,
}

# Mass gained per merged PR, by complexity label
PR_MASS = {
    "L3": 30,
    "L2": 15,
    "L1": 10,
    "DEFAULT": 5,
}

# Velocity (recent activity)
VELOCITY_WINDOW_DAYS = 60
VELOCITY_PER_RECENT_PR = 10

# Event participation proxy: min(pr_count // PRS_PER_EVENT, total events)
PRS_PER_EVENT = 2
EVENT_ATTENDANCE_XP = 250
EVENT_MASS = 2
EVENT_VELOCITY = 5

# --- Tier Thresholds (checked in this order) ---
TITAN_MIN_MASS = 100       # mass > 100
STRIKER_MIN_VELOCITY = 50  # velocity > 50
SCOUT_MIN_EVENTS = 3       # events > 3

# --- Status Thresholds ---
OVERDRIVE_MIN_VELOCITY = 80
ONLINE_MIN_VELOCITY = 20

# --- Achievements ---
# Off by default: badges are reported but do not change XP
USE_ACHIEVEMENT_BONUS = False
CONSISTENCY_MIN_DAYS = 30
SPEED_DEMON_MAX_HOURS = 24

# --- League Configuration (homepage widget) ---
LEAGUE_GOLD_XP = 15000
LEAGUE_SILVER_XP = 7500
LEAGUE_BRONZE_XP = 3000
HOMEPAGE_TOP_N = 5

# --- Roster Tiers (dashboard roster view) ---
ROSTER_GOLD_XP = 5000
ROSTER_SILVER_XP = 2000

# --- Events ---
EVENTS_PER_PAGE = 6

# --- Logging ---
LOG_LEVEL = getattr(logging, os.environ.get("PHANTOMS_LOG_LEVEL", "INFO").upper(), logging.INFO)
