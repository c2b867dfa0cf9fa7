"""
Data Ingestion

Modules:
- github_client: Paginated pull-request fetch from the GitHub REST API
- events_feed: Community events JSON feed and listing helpers
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "fetch_pull_requests":
        from phantoms.ingestion.github_client import fetch_pull_requests
        return fetch_pull_requests
    if name == "load_events":
        from phantoms.ingestion.events_feed import load_events
        return load_events
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
