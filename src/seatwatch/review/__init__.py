"""Review - pending-ticket aggregation, seat lookup and approval."""

from seatwatch.review.exceptions import InvalidSeatError, InvalidTicketIdError, ReviewError
from seatwatch.review.models import SeatTickets
from seatwatch.review.service import ReviewService, find_seat_project

__all__ = [
    "InvalidSeatError",
    "InvalidTicketIdError",
    "ReviewError",
    "ReviewService",
    "SeatTickets",
    "find_seat_project",
]
