"""Classroom map and health endpoints."""

from fastapi import APIRouter

from seatwatch.api.dependencies import SettingsDep
from seatwatch.api.models import HealthResponse, LayoutResponse, classroom_to_response
from seatwatch.seating import CLASSROOMS

router = APIRouter(tags=["layout"])


@router.get("/layout", response_model=LayoutResponse)
def get_layout() -> LayoutResponse:
    """Get the classroom map."""
    return LayoutResponse(classrooms=[classroom_to_response(room) for room in CLASSROOMS])


@router.get("/health", response_model=HealthResponse)
def health(settings: SettingsDep) -> HealthResponse:
    """Report liveness without contacting the tracker."""
    return HealthResponse(status="ok", tracker_url=settings.redmine_url)
