"""SeatDetailView - One seat's tickets, grouped by status, with approval."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from seatwatch.config import DEFAULT_PENDING_STATUS_ID
from seatwatch.dashboard.exceptions import DashboardError
from seatwatch.seating import StatusGroup, group_by_status

if TYPE_CHECKING:
    from seatwatch.dashboard.client import ProxyClient
    from seatwatch.tracker import Ticket

logger = logging.getLogger("seatwatch.dashboard.seat_detail")


class SeatDetailView:
    """Detail view for one seat.

    Fetches independently of the poller. The ticket list is replaced
    wholesale on every successful fetch and never edited in place.
    """

    def __init__(
        self,
        client: ProxyClient,
        seat_number: int,
        pending_status_id: int = DEFAULT_PENDING_STATUS_ID,
        on_approved: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the view.

        Args:
            client: Proxy client.
            seat_number: Seat being shown.
            pending_status_id: Status whose group is listed first.
            on_approved: Awaited after a successful approval, alongside the
                seat re-fetch (typically ``Poller.refresh``).
        """
        self.client = client
        self.seat_number = seat_number
        self.pending_status_id = pending_status_id
        self.on_approved = on_approved
        self.issues: tuple[Ticket, ...] = ()
        self.total_count = 0
        self.loading = False
        self.error: str | None = None
        self.message: str | None = None

    async def open(self) -> None:
        """Fetch the seat's tickets."""
        self.loading = True
        try:
            page = await self.client.fetch_seat(self.seat_number)
        except DashboardError as e:
            logger.warning("Failed to fetch seat %d: %s", self.seat_number, e)
            self.error = str(e)
        else:
            self.issues = tuple(page.issues)
            self.total_count = page.total_count
            self.error = None
        finally:
            self.loading = False

    def groups(self) -> list[StatusGroup]:
        """The current tickets grouped by status, pending review first."""
        return group_by_status(self.issues, self.pending_status_id)

    async def approve(self, ticket_id: int) -> bool:
        """Approve a ticket, then re-fetch this seat and the aggregate view.

        Returns:
            True if the proxy reported success.
        """
        try:
            self.message = await self.client.approve(ticket_id)
        except DashboardError as e:
            logger.warning("Failed to approve ticket #%d: %s", ticket_id, e)
            self.error = str(e)
            return False

        self.error = None
        refreshes: list[Awaitable[None]] = [self.open()]
        if self.on_approved is not None:
            refreshes.append(self.on_approved())
        await asyncio.gather(*refreshes)
        return True
