"""Seating - seat resolution, the classroom map and ticket grouping."""

from seatwatch.seating.grouping import (
    SeatTicketIndex,
    StatusGroup,
    group_by_seat,
    group_by_status,
    highlighted_seats,
)
from seatwatch.seating.layout import CLASSROOMS, Classroom, SeatGroup, all_seats, classroom_of
from seatwatch.seating.resolver import (
    MAX_SEAT_NUMBER,
    MIN_SEAT_NUMBER,
    PROJECT_NAME_PATTERN,
    is_valid_seat,
    resolve_seat,
)

__all__ = [
    "CLASSROOMS",
    "MAX_SEAT_NUMBER",
    "MIN_SEAT_NUMBER",
    "PROJECT_NAME_PATTERN",
    "Classroom",
    "SeatGroup",
    "SeatTicketIndex",
    "StatusGroup",
    "all_seats",
    "classroom_of",
    "group_by_seat",
    "group_by_status",
    "highlighted_seats",
    "is_valid_seat",
    "resolve_seat",
]
