"""Custom exceptions for the tracker client."""


class TrackerError(Exception):
    """Base exception for tracker errors."""


class TrackerUnavailableError(TrackerError):
    """The tracker could not be reached (network or transport failure)."""


class TrackerRejectedError(TrackerError):
    """The tracker answered with a non-success status code."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TrackerError):
    """The tracker's response body could not be parsed."""
