"""Poller - Refreshes the dashboard state from the proxy on a timer."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from seatwatch.dashboard.exceptions import DashboardError

if TYPE_CHECKING:
    from seatwatch.dashboard.client import ProxyClient
    from seatwatch.dashboard.state import DashboardState

logger = logging.getLogger("seatwatch.dashboard.poller")

DEFAULT_INTERVAL = 10.0


class Poller:
    """Fetches pending tickets every ``interval`` seconds.

    At most one aggregate fetch is in flight. A timer tick that lands on a
    running fetch is dropped; an explicit ``refresh()`` that lands on one is
    queued and runs right after it, so post-approval refreshes never read a
    response that was requested before the approval.
    """

    def __init__(
        self,
        client: ProxyClient,
        state: DashboardState,
        interval: float = DEFAULT_INTERVAL,
        on_update: Callable[[DashboardState], None] | None = None,
    ) -> None:
        """Initialize the Poller.

        Args:
            client: Proxy client.
            state: State updated in place after every fetch.
            interval: Seconds between fetches.
            on_update: Called with the state after every fetch, failed or not.
        """
        self.client = client
        self.state = state
        self.interval = interval
        self.on_update = on_update
        self._in_flight = False
        self._refresh_requested = False
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fetch(self) -> None:
        self.state.begin_fetch()
        try:
            tickets = await self.client.fetch_tickets()
        except DashboardError as e:
            logger.warning("Failed to fetch pending tickets: %s", e)
            self.state.apply_error(str(e))
        else:
            self.state.apply_tickets(tickets)
            logger.debug(
                "Fetched %d ticket(s), %d seat(s) highlighted",
                len(tickets),
                len(self.state.highlighted_seats),
            )

        if self.on_update is not None:
            try:
                self.on_update(self.state)
            except Exception:
                logger.exception("Dashboard update callback failed")

    async def poll_once(self) -> bool:
        """Run one fetch unless one is already running.

        Returns:
            False if the call was coalesced into a running fetch.
        """
        if self._in_flight:
            return False

        self._in_flight = True
        try:
            while True:
                self._refresh_requested = False
                await self._fetch()
                if not self._refresh_requested:
                    break
        finally:
            self._in_flight = False
        return True

    async def refresh(self) -> None:
        """Fetch now, out of band from the timer."""
        if self._in_flight:
            self._refresh_requested = True
            return
        await self.poll_once()

    async def run(self) -> None:
        """Fetch immediately, then every ``interval`` seconds until cancelled."""
        logger.info("Polling every %.1fs", self.interval)
        while True:
            await self.poll_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start polling in a background task."""
        if self.running:
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Polling stopped")
