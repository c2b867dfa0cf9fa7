"""
GitHub Pull-Request Client

This module fetches the pull-request list of a repository from the GitHub
REST API and converts the raw payloads into PullRequestRecords.

Pages are fetched one after another (state=all, 100 per page) up to a
fixed page cap, stopping early on an empty page. There is no retry and no
backoff.

Usage:
    from phantoms.ingestion.github_client import fetch_pull_requests, parse_pull_requests
    records = parse_pull_requests(fetch_pull_requests("owner", "repo"))
"""

import requests

from phantoms.config import (
    API_BASE,
    GITHUB_TOKEN,
    MAX_PR_PAGES,
    PR_PER_PAGE,
    REQUEST_TIMEOUT,
)
from phantoms.exceptions import PullRequestFetchError
from phantoms.scoring.models import PullRequestRecord
from phantoms.utils import parse_timestamp, setup_logging, validate_positive

# --- Module Logger ---
logger = setup_logging(__name__)

USER_AGENT = "pixel-phantoms-command-center"


def build_headers(token: str | None = None) -> dict:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def pulls_url(owner: str, repo: str) -> str:
    return f"{API_BASE}/repos/{owner}/{repo}/pulls"


def fetch_pull_requests(
    owner: str,
    repo: str,
    session: requests.Session | None = None,
    max_pages: int = MAX_PR_PAGES,
    per_page: int = PR_PER_PAGE,
    strict: bool = True,
    token: str | None = GITHUB_TOKEN,
) -> list[dict]:
    """
    Fetch raw pull-request payloads, page by page.

    Args:
        owner: Repository owner login
        repo: Repository name
        session: requests.Session to use (a new one is created if None)
        max_pages: Maximum number of pages to request
        per_page: Records per page (GitHub caps this at 100)
        strict: Raise on failure instead of returning what was collected
        token: Optional GitHub token for a higher rate limit

    Returns:
        List of raw pull-request dicts, in API order

    Raises:
        PullRequestFetchError: On a non-success status or transport error
            (only when strict is True)
        ValueError: If max_pages or per_page is below 1
    """
    validate_positive("max_pages", max_pages)
    validate_positive("per_page", per_page)

    http = session or requests.Session()
    url = pulls_url(owner, repo)
    headers = build_headers(token)
    pulls = []

    for page in range(1, max_pages + 1):
        params = {"state": "all", "per_page": per_page, "page": page}
        try:
            response = http.get(url, params=params, headers=headers, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            if strict:
                raise PullRequestFetchError(f"Failed to fetch pull requests: {e}") from e
            logger.warning(f"Transport error on page {page}, stopping: {e}")
            break

        if not response.ok:
            message = f"HTTP {response.status_code}: {response.reason}"
            if strict:
                raise PullRequestFetchError(
                    f"Failed to fetch pull requests: {message}",
                    status_code=response.status_code,
                )
            logger.warning(f"Page {page} returned {message}, stopping")
            break

        try:
            data = response.json()
        except ValueError as e:
            if strict:
                raise PullRequestFetchError(f"Failed to decode pull requests page {page}: {e}") from e
            logger.warning(f"Page {page} was not valid JSON, stopping")
            break

        if not data:
            break
        if not isinstance(data, list):
            if strict:
                raise PullRequestFetchError(f"Unexpected payload on page {page}: {type(data).__name__}")
            logger.warning(f"Page {page} returned {type(data).__name__}, stopping")
            break

        pulls.extend(data)
        logger.debug(f"Fetched page {page} ({len(data)} pull requests)")

    logger.info(f"Fetched {len(pulls)} pull requests from {owner}/{repo}")
    return pulls


def parse_pull_request(raw) -> PullRequestRecord | None:
    """
    Convert one raw GitHub payload into a PullRequestRecord.

    Args:
        raw: Pull-request dict from the REST API

    Returns:
        PullRequestRecord, or None when the payload has no author
    """
    if not isinstance(raw, dict):
        return None

    user = raw.get("user")
    if not isinstance(user, dict) or not user.get("login"):
        return None

    labels = []
    for label in raw.get("labels") or ():
        if isinstance(label, dict) and label.get("name"):
            labels.append(str(label["name"]))
        elif isinstance(label, str):
            labels.append(label)

    return PullRequestRecord(
        author=str(user["login"]),
        merged_at=parse_timestamp(raw.get("merged_at")),
        labels=frozenset(labels),
        avatar_url=user.get("avatar_url"),
        number=raw.get("number"),
        created_at=parse_timestamp(raw.get("created_at")),
    )


def parse_pull_requests(raws) -> list[PullRequestRecord]:
    """Parse a list of payloads, skipping malformed entries."""
    records = []
    for raw in raws or ():
        record = parse_pull_request(raw)
        if record is None:
            logger.debug(f"Skipping malformed pull request payload: {str(raw)[:80]}")
            continue
        records.append(record)
    return records
