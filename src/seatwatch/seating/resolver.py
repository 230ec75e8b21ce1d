"""Seat Resolver - maps a project name to a seat number."""

from __future__ import annotations

import re

MIN_SEAT_NUMBER = 1
MAX_SEAT_NUMBER = 80

# "組み込みシステム基礎 (N)", searched anywhere in the name; ASCII digits only
PROJECT_NAME_PATTERN = re.compile(r"組み込みシステム基礎\s*\(([0-9]+)\)")


def is_valid_seat(seat_number: int) -> bool:
    """Return True if the seat number is within the classroom map."""
    return MIN_SEAT_NUMBER <= seat_number <= MAX_SEAT_NUMBER


def resolve_seat(project_name: str) -> int | None:
    """Extract the seat number encoded in a project name.

    Args:
        project_name: Project display name, e.g. "組み込みシステム基礎 (42)".

    Returns:
        The seat number, or None if the name carries no seat or the number
        is outside the classroom map.
    """
    match = PROJECT_NAME_PATTERN.search(project_name)
    if match is None:
        return None

    seat_number = int(match.group(1))
    if not is_valid_seat(seat_number):
        return None
    return seat_number
