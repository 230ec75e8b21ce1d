"""Data models for the review service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seatwatch.tracker import Project, RawIssue


@dataclass
class SeatTickets:
    """All tickets of the project registered at a seat.

    Attributes:
        seat_number: The requested seat.
        project: The project resolved to the seat, or None if no project is registered.
        issues: The project's tickets in every status, as the tracker sent them.
        total_count: Total reported by the tracker.
    """

    seat_number: int
    project: Project | None = None
    issues: list[RawIssue] = field(default_factory=list)
    total_count: int = 0
