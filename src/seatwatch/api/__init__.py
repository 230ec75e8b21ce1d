"""REST API for SeatWatch."""

from seatwatch.api.app import create_app
from seatwatch.api.models import (
    ApprovalResponse,
    LayoutResponse,
    SeatTicketsResponse,
    TicketErrorResponse,
    TicketListResponse,
)

__all__ = [
    "ApprovalResponse",
    "LayoutResponse",
    "SeatTicketsResponse",
    "TicketErrorResponse",
    "TicketListResponse",
    "create_app",
]
