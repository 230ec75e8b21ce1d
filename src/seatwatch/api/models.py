"""Pydantic models for REST API."""

from typing import Any

from pydantic import BaseModel

from seatwatch.seating import Classroom

# Ticket payloads are forwarded as raw dicts so every tracker field, null or
# not, reaches the dashboard unchanged.


class TicketListResponse(BaseModel):
    """Pending tickets across all seats."""

    issues: list[dict[str, Any]] = []


class SeatTicketsResponse(BaseModel):
    """Every ticket of the project at one seat."""

    issues: list[dict[str, Any]] = []
    total_count: int = 0


class TicketErrorResponse(BaseModel):
    """Failure envelope for the ticket list endpoints."""

    error: str
    issues: list[dict[str, Any]] = []


class ApprovalResponse(BaseModel):
    """Approval result envelope."""

    success: bool
    message: str | None = None
    error: str | None = None


# Layout models


class SeatGroupResponse(BaseModel):
    """Response model for a seat group."""

    seats: list[int]
    color_class: str
    margin_top: int


class ClassroomResponse(BaseModel):
    """Response model for a classroom."""

    title: str
    columns: list[list[SeatGroupResponse]]


class LayoutResponse(BaseModel):
    """Response model for the classroom map."""

    classrooms: list[ClassroomResponse]


def classroom_to_response(room: Classroom) -> ClassroomResponse:
    """Convert a Classroom to ClassroomResponse."""
    return ClassroomResponse(
        title=room.title,
        columns=[
            [
                SeatGroupResponse(
                    seats=list(group.seats),
                    color_class=group.color_class,
                    margin_top=group.margin_top,
                )
                for group in column
            ]
            for column in room.columns
        ],
    )


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    tracker_url: str
