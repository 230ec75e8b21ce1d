"""Tracker client - Interfaces with the Redmine REST API."""

from seatwatch.tracker.client import API_KEY_HEADER, PAGE_SIZE, TrackerClient
from seatwatch.tracker.exceptions import (
    MalformedResponseError,
    TrackerError,
    TrackerRejectedError,
    TrackerUnavailableError,
)
from seatwatch.tracker.models import (
    IssuePage,
    NamedRef,
    Project,
    RawIssue,
    RawIssuePage,
    Ticket,
)

__all__ = [
    "API_KEY_HEADER",
    "PAGE_SIZE",
    "IssuePage",
    "MalformedResponseError",
    "NamedRef",
    "Project",
    "RawIssue",
    "RawIssuePage",
    "Ticket",
    "TrackerClient",
    "TrackerError",
    "TrackerRejectedError",
    "TrackerUnavailableError",
]
