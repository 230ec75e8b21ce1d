"""Ticket endpoints: pending tickets, seat detail and approval."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from seatwatch.api.dependencies import ReviewServiceDep
from seatwatch.api.models import (
    ApprovalResponse,
    SeatTicketsResponse,
    TicketErrorResponse,
    TicketListResponse,
)
from seatwatch.review import InvalidSeatError, InvalidTicketIdError
from seatwatch.tracker import TrackerError

logger = logging.getLogger("seatwatch.api.tickets")

router = APIRouter(prefix="/tickets", tags=["tickets"])


def _ticket_list_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=TicketErrorResponse(error=message).model_dump(),
    )


def _approval_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApprovalResponse(success=False, error=message).model_dump(exclude_none=True),
    )


@router.get("", response_model=TicketListResponse)
async def list_pending_tickets(service: ReviewServiceDep) -> TicketListResponse | JSONResponse:
    """List all tickets awaiting review. Grouping by seat is done by the client."""
    try:
        issues = await service.pending_tickets()
    except TrackerError as e:
        logger.error("Failed to fetch pending tickets: %s", e)
        return _ticket_list_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return TicketListResponse(issues=issues)


@router.get("/seat/{seat_number}", response_model=SeatTicketsResponse)
async def get_seat_tickets(
    seat_number: int, service: ReviewServiceDep
) -> SeatTicketsResponse | JSONResponse:
    """List every ticket of the project registered at a seat."""
    try:
        result = await service.seat_tickets(seat_number)
    except InvalidSeatError as e:
        return _ticket_list_error(status.HTTP_400_BAD_REQUEST, str(e))
    except TrackerError as e:
        logger.error("Failed to fetch tickets for seat %d: %s", seat_number, e)
        return _ticket_list_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return SeatTicketsResponse(issues=result.issues, total_count=result.total_count)


@router.put(
    "/{ticket_id}/approve",
    response_model=ApprovalResponse,
    response_model_exclude_none=True,
)
async def approve_ticket(
    ticket_id: int, service: ReviewServiceDep
) -> ApprovalResponse | JSONResponse:
    """Move a ticket to the approved status."""
    try:
        await service.approve(ticket_id)
    except InvalidTicketIdError as e:
        return _approval_error(status.HTTP_400_BAD_REQUEST, str(e))
    except TrackerError as e:
        logger.error("Failed to approve ticket #%d: %s", ticket_id, e)
        return _approval_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return ApprovalResponse(success=True, message=f"Ticket #{ticket_id} approved")
