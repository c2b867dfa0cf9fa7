"""Exception hierarchy for the Pixel Phantoms Command Center."""


class PhantomsError(Exception):
    """Base exception for all project errors"""
    pass


class PullRequestFetchError(PhantomsError):
    """Raised when the pull-request source returns a failure or is unreachable"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CacheError(PhantomsError):
    """Raised when the leaderboard cache cannot be read or written"""
    pass
