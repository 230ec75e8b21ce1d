"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from seatwatch.config import Settings
from seatwatch.review import ReviewService
from seatwatch.review.service import Tracker
from seatwatch.tracker import TrackerClient

# Global Settings instance (set by create_app)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def get_settings() -> Generator[Settings, None, None]:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_settings() first.")
    yield _settings


# Type alias for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global tracker client (opened on app startup)
_tracker: Tracker | None = None


def init_tracker(settings: Settings) -> TrackerClient:
    """Initialize the global tracker client from settings."""
    global _tracker  # noqa: PLW0603
    client = TrackerClient(
        base_url=settings.redmine_url,
        api_key=settings.api_key,
        timeout=settings.timeout,
    )
    _tracker = client
    return client


def set_tracker(tracker: Tracker) -> None:
    """Install a tracker implementation (e.g. a stub in tests)."""
    global _tracker  # noqa: PLW0603
    _tracker = tracker


async def close_tracker() -> None:
    """Close the global tracker client."""
    global _tracker  # noqa: PLW0603
    if isinstance(_tracker, TrackerClient):
        await _tracker.aclose()
    _tracker = None


def get_tracker() -> Generator[Tracker, None, None]:
    """Dependency that provides the tracker client."""
    if _tracker is None:
        raise RuntimeError("Tracker not initialized. Call init_tracker() first.")
    yield _tracker


# Type alias for dependency injection
TrackerDep = Annotated[Tracker, Depends(get_tracker)]


def get_review_service(
    tracker: TrackerDep, settings: SettingsDep
) -> Generator[ReviewService, None, None]:
    """Dependency that provides a ReviewService bound to the configured statuses."""
    yield ReviewService(
        tracker=tracker,
        tracker_id=settings.tracker_id,
        pending_status_id=settings.pending_status_id,
        approved_status_id=settings.approved_status_id,
    )


# Type alias for dependency injection
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
