"""Dashboard state: seat highlights and the connection indicator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from seatwatch.seating import group_by_seat, highlighted_seats

if TYPE_CHECKING:
    from collections.abc import Sequence

    from seatwatch.tracker import Ticket


class ConnectionStatus(str, Enum):
    """Status indicator shown in the status bar."""

    CONNECTING = "connecting"
    OK = "ok"
    ERROR = "error"


STATUS_TEXT = {
    ConnectionStatus.CONNECTING: "接続中...",
    ConnectionStatus.OK: "正常",
}


@dataclass
class DashboardState:
    """What the seating chart shows.

    Highlights and the seat index are only ever replaced together, by
    ``apply_tickets``. A failed fetch leaves them as they were.
    """

    status: ConnectionStatus = ConnectionStatus.CONNECTING
    status_text: str = STATUS_TEXT[ConnectionStatus.CONNECTING]
    last_updated: datetime | None = None
    ticket_count: int = 0
    highlighted_seats: frozenset[int] = frozenset()
    seat_tickets: dict[int, tuple[Ticket, ...]] = field(default_factory=dict)

    def begin_fetch(self) -> None:
        """Mark an aggregate fetch as in flight."""
        self.status = ConnectionStatus.CONNECTING
        self.status_text = STATUS_TEXT[ConnectionStatus.CONNECTING]

    def apply_tickets(self, tickets: Sequence[Ticket], now: datetime | None = None) -> None:
        """Replace highlights and the seat index with a fresh ticket list."""
        index = group_by_seat(tickets)
        self.seat_tickets = {seat: tuple(members) for seat, members in index.items()}
        self.highlighted_seats = highlighted_seats(index)
        self.ticket_count = len(tickets)
        self.status = ConnectionStatus.OK
        self.status_text = STATUS_TEXT[ConnectionStatus.OK]
        self.last_updated = now or datetime.now()

    def apply_error(self, message: str) -> None:
        """Show a fetch failure; highlights stay as last fetched."""
        self.status = ConnectionStatus.ERROR
        self.status_text = f"エラー: {message}"

    def tickets_at(self, seat_number: int) -> tuple[Ticket, ...]:
        """Pending tickets at a seat (empty if none)."""
        return self.seat_tickets.get(seat_number, ())

    def is_clickable(self, seat_number: int) -> bool:
        """Seats open a detail view only when they have pending tickets."""
        return bool(self.tickets_at(seat_number))
