"""Error types raised by the feed synchronizer."""

from typing import Optional


class DailyFeedError(Exception):
    """Base class for all dailyfeed errors."""


class SyncError(DailyFeedError):
    """A sync attempt failed and nothing was committed."""


class TransportError(SyncError):
    """The feed endpoint could not be reached (network failure or timeout)."""


class DecodeError(SyncError):
    """The response body is not a valid feed page."""


class ApiResponseError(SyncError):
    """The feed API answered with an application-level error."""

    def __init__(self, status: int, name: str, message: str) -> None:
        self.status = status
        self.name = name
        self.message = message
        super().__init__(f"API error {status} ({name}): {message}")


class RetriesExhaustedError(ApiResponseError):
    """The feed API kept failing with a server error after all retries."""

    def __init__(self, status: int, name: str, message: str, attempts: int) -> None:
        super().__init__(status, name, message)
        self.attempts = attempts
        self.args = (f"API error {status} ({name}) after {attempts} attempts: {message}",)


class StoreError(DailyFeedError):
    """Reading from or writing to the local store failed."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)
