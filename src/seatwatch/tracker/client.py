"""TrackerClient - Interfaces with the Redmine REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from seatwatch.logging import sanitize_for_log, truncate_output
from seatwatch.tracker.exceptions import (
    MalformedResponseError,
    TrackerRejectedError,
    TrackerUnavailableError,
)
from seatwatch.tracker.models import Project, RawIssue, RawIssuePage

logger = logging.getLogger("seatwatch.tracker")

API_KEY_HEADER = "X-Redmine-API-Key"

# Redmine caps "limit" at 100
PAGE_SIZE = 100

# status_id value meaning "any status"
ALL_STATUSES = "*"


class TrackerClient:
    """Async adapter for the Redmine REST API.

    Every call is a single request; nothing is retried or cached.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the tracker client.

        Args:
            base_url: Redmine base URL (e.g. "https://example.org/redmine")
            api_key: Redmine REST API key
            timeout: Request timeout in seconds (None keeps the httpx default)
            transport: Custom httpx transport (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client for the REST API."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    API_KEY_HEADER: self.api_key,
                    "Content-Type": "application/json",
                },
                **kwargs,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request to the tracker.

        Raises:
            TrackerUnavailableError: If the request could not be sent.
            TrackerRejectedError: If the tracker answered with a non-2xx status.
        """
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning("Tracker unreachable: %s %s: %s", method, path, e)
            raise TrackerUnavailableError(f"Tracker unreachable: {e}") from e

        if not response.is_success:
            logger.warning(
                "Tracker rejected %s %s: %d - %s",
                method,
                path,
                response.status_code,
                sanitize_for_log(truncate_output(response.text, 500)),
            )
            raise TrackerRejectedError(
                f"HTTP error! status: {response.status_code}", response.status_code
            )

        return response

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self._request("GET", path, params=params)
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON from {path}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object from {path}")
        return data

    @staticmethod
    def _raw_issues(data: dict[str, Any]) -> list[RawIssue]:
        """Pull the ``issues`` array out of a body without interpreting the issues."""
        issues = data.get("issues", [])
        if not isinstance(issues, list) or not all(isinstance(i, dict) for i in issues):
            raise MalformedResponseError("Malformed issue list: expected an array of objects")
        return issues

    async def list_issues(
        self, tracker_id: int, status_id: int, limit: int = PAGE_SIZE
    ) -> list[RawIssue]:
        """List issues with the given tracker and status.

        Only the first page is fetched; larger result sets are truncated.
        Issues are returned as sent, so fields and nulls survive unchanged.

        Args:
            tracker_id: Tracker (category) ID
            status_id: Status ID
            limit: Page size

        Returns:
            Raw issues in the tracker's listing order
        """
        data = await self._get_json(
            "/issues.json",
            {"tracker_id": tracker_id, "status_id": status_id, "limit": limit},
        )
        issues = self._raw_issues(data)

        logger.debug(
            "Fetched %d issue(s) (tracker=%s, status=%s)", len(issues), tracker_id, status_id
        )
        return issues

    async def list_project_issues(
        self, project_id: int, tracker_id: int, limit: int = PAGE_SIZE
    ) -> RawIssuePage:
        """List a project's issues of one tracker, in any status.

        Args:
            project_id: Project ID
            tracker_id: Tracker (category) ID
            limit: Page size

        Returns:
            RawIssuePage with the issues and the tracker-reported total count
        """
        data = await self._get_json(
            "/issues.json",
            {
                "project_id": project_id,
                "tracker_id": tracker_id,
                "limit": limit,
                "status_id": ALL_STATUSES,
            },
        )
        issues = self._raw_issues(data)
        try:
            page = RawIssuePage(issues=issues, total_count=data.get("total_count", len(issues)))
        except ValidationError as e:
            raise MalformedResponseError(f"Malformed total_count: {e}") from e

        logger.debug("Fetched %d issue(s) for project %s", len(page.issues), project_id)
        return page

    async def list_projects(self, page_size: int = PAGE_SIZE) -> list[Project]:
        """List every project, following pagination.

        Pages are requested until one comes back shorter than ``page_size``.

        Returns:
            Projects in the tracker's enumeration order
        """
        projects: list[Project] = []
        offset = 0
        while True:
            data = await self._get_json(
                "/projects.json", {"limit": page_size, "offset": offset}
            )
            try:
                page = [Project.model_validate(p) for p in data.get("projects", [])]
            except (ValidationError, TypeError) as e:
                raise MalformedResponseError(f"Malformed project list: {e}") from e

            projects.extend(page)
            if len(page) < page_size:
                break
            offset += page_size

        logger.debug("Fetched %d project(s)", len(projects))
        return projects

    async def update_issue_status(self, issue_id: int, status_id: int) -> None:
        """Set an issue's status.

        Args:
            issue_id: Issue ID
            status_id: Target status ID

        Raises:
            TrackerRejectedError: If the tracker refuses the update (e.g. 404)
        """
        logger.info("Setting issue #%d status to %d", issue_id, status_id)
        await self._request(
            "PUT",
            f"/issues/{issue_id}.json",
            json={"issue": {"status_id": status_id}},
        )
        logger.info("Issue #%d status set to %d", issue_id, status_id)
