"""ProxyClient - Talks to the SeatWatch proxy on behalf of the dashboard."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from seatwatch.dashboard.exceptions import DashboardError
from seatwatch.tracker.models import IssuePage, Ticket

logger = logging.getLogger("seatwatch.dashboard.client")


class ProxyClient:
    """Async client for the proxy's ``/api`` endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the proxy client.

        Args:
            base_url: Proxy URL
            transport: Custom httpx transport (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _call(self, method: str, path: str) -> dict[str, Any]:
        try:
            response = await self.client.request(method, path)
        except httpx.HTTPError as e:
            raise DashboardError(f"Proxy unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise DashboardError(
                str(message or f"HTTP error! status: {response.status_code}"),
                response.status_code,
            )
        # A 2xx we cannot read says nothing about the pending tickets
        if not isinstance(data, dict):
            raise DashboardError(f"Malformed response from {path}", response.status_code)
        return data

    @staticmethod
    def _parse_tickets(data: dict[str, Any], path: str) -> list[Ticket]:
        issues = data.get("issues")
        if not isinstance(issues, list):
            raise DashboardError(f"Malformed ticket list from {path}: issues is not an array")

        tickets: list[Ticket] = []
        for issue in issues:
            try:
                tickets.append(Ticket.model_validate(issue))
            except ValidationError as e:
                issue_id = issue.get("id") if isinstance(issue, dict) else None
                logger.warning("Skipping unreadable ticket %s: %s", issue_id, e)
        return tickets

    async def fetch_tickets(self) -> list[Ticket]:
        """Fetch all tickets awaiting review.

        Tickets that cannot be read (e.g. without a project) are skipped.

        Raises:
            DashboardError: If the proxy fails or the list itself is unreadable.
        """
        path = "/api/tickets"
        return self._parse_tickets(await self._call("GET", path), path)

    async def fetch_seat(self, seat_number: int) -> IssuePage:
        """Fetch every ticket of the project at a seat."""
        path = f"/api/tickets/seat/{seat_number}"
        data = await self._call("GET", path)
        tickets = self._parse_tickets(data, path)
        try:
            return IssuePage(issues=tickets, total_count=data.get("total_count", len(tickets)))
        except ValidationError as e:
            raise DashboardError(f"Malformed seat detail: {e}") from e

    async def approve(self, ticket_id: int) -> str:
        """Approve a ticket.

        Returns:
            The proxy's confirmation message
        """
        data = await self._call("PUT", f"/api/tickets/{ticket_id}/approve")
        if not data.get("success"):
            raise DashboardError(str(data.get("error") or "Approval failed"))
        logger.info("Approved ticket #%d", ticket_id)
        return str(data.get("message", ""))
