"""Unit tests for the Poller."""

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from seatwatch.dashboard import ConnectionStatus, DashboardError, DashboardState, Poller
from seatwatch.tracker import Ticket

COURSE = "組み込みシステム基礎"

IssueFactory = Callable[..., dict[str, Any]]


class MockProxy:
    """Mock proxy client; fetches can be gated to overlap them."""

    def __init__(self) -> None:
        self.tickets: list[Ticket] = []
        self.error: DashboardError | None = None
        self.fetches = 0
        self.gate: asyncio.Event | None = None

    async def fetch_tickets(self) -> list[Ticket]:
        self.fetches += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.tickets)


@pytest.fixture
def proxy() -> MockProxy:
    """Create a mock proxy."""
    return MockProxy()


@pytest.fixture
def state() -> DashboardState:
    """Create an empty dashboard state."""
    return DashboardState()


@pytest.mark.unit
class TestPollOnce:
    """Tests for a single poll."""

    @pytest.mark.asyncio
    async def test_success_updates_state(
        self, proxy: MockProxy, state: DashboardState, make_issue: IssueFactory
    ) -> None:
        """A successful fetch highlights the pending seats."""
        proxy.tickets = [Ticket.model_validate(make_issue(1, f"{COURSE} (3)"))]
        updates: list[ConnectionStatus] = []
        poller = Poller(proxy, state, on_update=lambda s: updates.append(s.status))

        assert await poller.poll_once() is True

        assert state.highlighted_seats == frozenset({3})
        assert updates == [ConnectionStatus.OK]

    @pytest.mark.asyncio
    async def test_failure_sets_error(
        self, proxy: MockProxy, state: DashboardState, make_issue: IssueFactory
    ) -> None:
        """A failed fetch reports the error and keeps earlier highlights."""
        proxy.tickets = [Ticket.model_validate(make_issue(1, f"{COURSE} (3)"))]
        poller = Poller(proxy, state)
        await poller.poll_once()

        proxy.error = DashboardError("HTTP error! status: 500", 500)
        await poller.poll_once()

        assert state.status == ConnectionStatus.ERROR
        assert "500" in state.status_text
        assert state.highlighted_seats == frozenset({3})


@pytest.mark.unit
class TestCoalescing:
    """Tests for overlapping fetches."""

    @pytest.mark.asyncio
    async def test_overlapping_tick_dropped(self, proxy: MockProxy, state: DashboardState) -> None:
        """A poll during a running fetch does not start a second one."""
        proxy.gate = asyncio.Event()
        poller = Poller(proxy, state)

        first = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)

        assert await poller.poll_once() is False

        proxy.gate.set()
        assert await first is True
        assert proxy.fetches == 1

    @pytest.mark.asyncio
    async def test_refresh_during_fetch_runs_after(
        self, proxy: MockProxy, state: DashboardState
    ) -> None:
        """A refresh during a running fetch triggers one follow-up fetch."""
        proxy.gate = asyncio.Event()
        poller = Poller(proxy, state)

        first = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)
        await poller.refresh()
        await poller.refresh()

        proxy.gate.set()
        await first

        assert proxy.fetches == 2

    @pytest.mark.asyncio
    async def test_refresh_when_idle_fetches(self, proxy: MockProxy, state: DashboardState) -> None:
        """A refresh with nothing in flight fetches immediately."""
        poller = Poller(proxy, state)

        await poller.refresh()

        assert proxy.fetches == 1


@pytest.mark.unit
class TestTimer:
    """Tests for the polling loop."""

    @pytest.mark.asyncio
    async def test_polls_repeatedly_until_stopped(
        self, proxy: MockProxy, state: DashboardState
    ) -> None:
        """The loop fetches on start and again on each interval."""
        poller = Poller(proxy, state, interval=0.01)

        poller.start()
        assert poller.running
        await asyncio.sleep(0.1)
        await poller.stop()

        assert not poller.running
        assert proxy.fetches >= 2

        fetches = proxy.fetches
        await asyncio.sleep(0.05)
        assert proxy.fetches == fetches

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_loop(
        self, proxy: MockProxy, state: DashboardState
    ) -> None:
        """Errors are reported and polling continues."""
        proxy.error = DashboardError("Proxy unreachable")
        poller = Poller(proxy, state, interval=0.01)

        poller.start()
        await asyncio.sleep(0.1)

        assert poller.running
        await poller.stop()
        assert proxy.fetches >= 2
        assert state.status == ConnectionStatus.ERROR

    @pytest.mark.asyncio
    async def test_stop_without_start(self, proxy: MockProxy, state: DashboardState) -> None:
        """Stopping an idle poller is a no-op."""
        await Poller(proxy, state).stop()


@pytest.mark.unit
class TestUpdateCallback:
    """Tests for on_update failures."""

    @staticmethod
    def _raising(state: DashboardState) -> None:
        raise RuntimeError("render failed")

    @pytest.mark.asyncio
    async def test_poll_once_survives_callback_error(
        self, proxy: MockProxy, state: DashboardState, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A raising callback is logged and the fetch still counts as done."""
        poller = Poller(proxy, state, on_update=self._raising)

        with caplog.at_level("ERROR", logger="seatwatch.dashboard.poller"):
            assert await poller.poll_once() is True

        assert state.status == ConnectionStatus.OK
        assert "update callback failed" in caplog.text
        assert await poller.poll_once() is True

    @pytest.mark.asyncio
    async def test_loop_survives_callback_error(
        self, proxy: MockProxy, state: DashboardState
    ) -> None:
        """Polling continues after the callback raises."""
        poller = Poller(proxy, state, interval=0.01, on_update=self._raising)

        poller.start()
        await asyncio.sleep(0.1)

        assert poller.running
        await poller.stop()
        assert proxy.fetches >= 2
