"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from typing import Any

import pytest

from seatwatch.config import Settings

PENDING_STATUS_ID = 4
APPROVED_STATUS_ID = 3
TRACKER_ID = 5


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake Redmine."""
    return Settings(
        api_key="test-api-key",
        redmine_url="https://redmine.test",
        tracker_id=TRACKER_ID,
        pending_status_id=PENDING_STATUS_ID,
        approved_status_id=APPROVED_STATUS_ID,
    )


@pytest.fixture
def make_issue() -> Callable[..., dict[str, Any]]:
    """Factory for Redmine issue payloads."""

    def _make_issue(
        issue_id: int,
        project_name: str,
        project_id: int = 1,
        status_id: int = PENDING_STATUS_ID,
        status_name: str = "審査待ち",
        **extra: Any,
    ) -> dict[str, Any]:
        issue: dict[str, Any] = {
            "id": issue_id,
            "subject": f"Task {issue_id}",
            "project": {"id": project_id, "name": project_name},
            "tracker": {"id": TRACKER_ID, "name": "課題"},
            "status": {"id": status_id, "name": status_name},
        }
        issue.update(extra)
        return issue

    return _make_issue
