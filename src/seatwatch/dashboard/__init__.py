"""Dashboard - polls the proxy and keeps the seating chart state."""

from seatwatch.dashboard.client import ProxyClient
from seatwatch.dashboard.exceptions import DashboardError
from seatwatch.dashboard.poller import DEFAULT_INTERVAL, Poller
from seatwatch.dashboard.render import format_date, render_dashboard, render_seat_detail
from seatwatch.dashboard.seat_detail import SeatDetailView
from seatwatch.dashboard.state import ConnectionStatus, DashboardState

__all__ = [
    "DEFAULT_INTERVAL",
    "ConnectionStatus",
    "DashboardError",
    "DashboardState",
    "Poller",
    "ProxyClient",
    "SeatDetailView",
    "format_date",
    "render_dashboard",
    "render_seat_detail",
]
