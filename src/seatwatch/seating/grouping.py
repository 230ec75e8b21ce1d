"""Projections of ticket lists onto seats and status groups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seatwatch.seating.resolver import resolve_seat

if TYPE_CHECKING:
    from seatwatch.tracker.models import Ticket

SeatTicketIndex = dict[int, list["Ticket"]]


def group_by_seat(tickets: Iterable[Ticket]) -> SeatTicketIndex:
    """Group tickets by the seat their project resolves to.

    Tickets of projects without a seat are dropped. Each seat's list keeps
    the order of ``tickets``.
    """
    index: SeatTicketIndex = {}
    for ticket in tickets:
        seat_number = resolve_seat(ticket.project.name)
        if seat_number is None:
            continue
        index.setdefault(seat_number, []).append(ticket)
    return index


def highlighted_seats(index: SeatTicketIndex) -> frozenset[int]:
    """Seats that have at least one ticket."""
    return frozenset(seat for seat, tickets in index.items() if tickets)


@dataclass(frozen=True)
class StatusGroup:
    """Tickets sharing one status."""

    status_id: int
    status_name: str
    tickets: tuple[Ticket, ...]


def group_by_status(tickets: Iterable[Ticket], pending_status_id: int) -> list[StatusGroup]:
    """Partition tickets by status name.

    The pending-review group comes first, the rest by ascending status id.
    Within a group tickets keep their input order.

    Args:
        tickets: Tickets to partition (not modified).
        pending_status_id: Status id that sorts first.

    Returns:
        Ordered status groups.
    """
    groups: dict[str, tuple[int, list[Ticket]]] = {}
    for ticket in tickets:
        name = ticket.status.name
        if name not in groups:
            groups[name] = (ticket.status.id, [])
        groups[name][1].append(ticket)

    ordered = sorted(
        groups.items(),
        key=lambda item: (item[1][0] != pending_status_id, item[1][0]),
    )
    return [
        StatusGroup(status_id=status_id, status_name=name, tickets=tuple(members))
        for name, (status_id, members) in ordered
    ]
