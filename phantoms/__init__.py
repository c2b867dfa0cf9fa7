"""
Pixel Phantoms Command Center - Core Package

This package contains the core modules for:
- Contributor scoring and ranking (phantoms.scoring)
- Data ingestion from GitHub and the events feed (phantoms.ingestion)
- Leaderboard cache and pipeline
- Shared configuration and utilities
"""

__version__ = "1.0.0"
