"""Custom exceptions for the review service."""


class ReviewError(Exception):
    """Base exception for review service errors."""


class InvalidSeatError(ReviewError):
    """Seat number outside the classroom map."""


class InvalidTicketIdError(ReviewError):
    """Ticket ID is not a positive integer."""
