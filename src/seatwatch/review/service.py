"""ReviewService - Bridges Redmine projects and issues to classroom seats."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from seatwatch.logging import get_logger
from seatwatch.review.exceptions import InvalidSeatError, InvalidTicketIdError
from seatwatch.review.models import SeatTickets
from seatwatch.seating import MAX_SEAT_NUMBER, MIN_SEAT_NUMBER, is_valid_seat, resolve_seat

if TYPE_CHECKING:
    from seatwatch.tracker import Project, RawIssue, RawIssuePage

logger = get_logger("review")


class Tracker(Protocol):
    """Interface for the tracker client."""

    async def list_issues(
        self, tracker_id: int, status_id: int, limit: int = ...
    ) -> list[RawIssue]:
        """List issues with the given tracker and status."""
        ...

    async def list_project_issues(
        self, project_id: int, tracker_id: int, limit: int = ...
    ) -> RawIssuePage:
        """List a project's issues in any status."""
        ...

    async def list_projects(self, page_size: int = ...) -> list[Project]:
        """List every project."""
        ...

    async def update_issue_status(self, issue_id: int, status_id: int) -> None:
        """Set an issue's status."""
        ...


def find_seat_project(projects: Iterable[Project], seat_number: int) -> Project | None:
    """Return the first project whose name resolves to ``seat_number``.

    When several projects claim the same seat the first in enumeration order
    wins and the others are logged.
    """
    matches = [p for p in projects if resolve_seat(p.name) == seat_number]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Seat %d is claimed by %d projects (%s); using #%d",
            seat_number,
            len(matches),
            ", ".join(f"#{p.id} {p.name}" for p in matches),
            matches[0].id,
        )
    return matches[0]


class ReviewService:
    """Queries and approves tickets awaiting review.

    Stateless: every call goes to the tracker.
    """

    def __init__(
        self,
        tracker: Tracker,
        tracker_id: int,
        pending_status_id: int,
        approved_status_id: int,
    ) -> None:
        """Initialize the review service.

        Args:
            tracker: Tracker client.
            tracker_id: Tracker (category) of reviewable tickets.
            pending_status_id: Status of tickets awaiting review.
            approved_status_id: Status set on approval.
        """
        self.tracker = tracker
        self.tracker_id = tracker_id
        self.pending_status_id = pending_status_id
        self.approved_status_id = approved_status_id

    async def pending_tickets(self) -> list[RawIssue]:
        """All tickets awaiting review, tracker-wide (first page only)."""
        tickets = await self.tracker.list_issues(self.tracker_id, self.pending_status_id)
        logger.info("Found %d ticket(s) awaiting review", len(tickets))
        return tickets

    async def seat_tickets(self, seat_number: int) -> SeatTickets:
        """All tickets, in every status, of the project registered at a seat.

        Args:
            seat_number: Seat to look up.

        Returns:
            SeatTickets; empty when no project is registered at the seat.

        Raises:
            InvalidSeatError: If the seat is outside the classroom map. The
                tracker is not contacted.
        """
        if not is_valid_seat(seat_number):
            raise InvalidSeatError(
                f"Seat number must be between {MIN_SEAT_NUMBER} and {MAX_SEAT_NUMBER}, "
                f"got {seat_number}"
            )

        projects = await self.tracker.list_projects()
        project = find_seat_project(projects, seat_number)
        if project is None:
            logger.info("No project registered at seat %d", seat_number)
            return SeatTickets(seat_number=seat_number)

        page = await self.tracker.list_project_issues(project.id, self.tracker_id)
        logger.info(
            "Seat %d -> project #%d: %d ticket(s)", seat_number, project.id, page.total_count
        )
        return SeatTickets(
            seat_number=seat_number,
            project=project,
            issues=page.issues,
            total_count=page.total_count,
        )

    async def approve(self, ticket_id: int) -> None:
        """Move a ticket to the approved status.

        The current status is not checked; approving twice succeeds twice.

        Raises:
            InvalidTicketIdError: If ticket_id is not positive.
        """
        if ticket_id <= 0:
            raise InvalidTicketIdError(f"Ticket ID must be a positive integer, got {ticket_id}")

        await self.tracker.update_issue_status(ticket_id, self.approved_status_id)
        logger.info("Approved ticket #%d", ticket_id)
