"""CLI entry point for SeatWatch.

- serve: run the proxy in front of Redmine
- watch: poll a running proxy and print the seating chart
- seat: show one seat's tickets, optionally approving one
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from seatwatch import __version__
from seatwatch.config import DEFAULT_PENDING_STATUS_ID, ConfigError, load_settings
from seatwatch.dashboard import (
    DashboardState,
    Poller,
    ProxyClient,
    SeatDetailView,
    render_dashboard,
    render_seat_detail,
)
from seatwatch.logging import setup_logging
from seatwatch.seating import is_valid_seat

DEFAULT_PROXY_URL = "http://localhost:3000"


@click.group()
@click.version_option(__version__)
def main() -> None:
    """SeatWatch - classroom seating chart for tickets awaiting review."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML settings file (environment variables override it)",
)
@click.option("--host", default="0.0.0.0", show_default=True, help="Listen address")
@click.option("--port", type=int, default=None, help="Listen port (default: from settings)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(config_path: Path | None, host: str, port: int | None, verbose: bool) -> None:
    """Run the ticket proxy."""
    import uvicorn  # noqa: PLC0415

    from seatwatch.api import create_app  # noqa: PLC0415

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    logger = setup_logging(level="DEBUG" if verbose else None, capture=("uvicorn",))
    listen_port = port or settings.port
    logger.info("Server running at http://%s:%d", host, listen_port)
    logger.info("Redmine URL: %s", settings.redmine_url)

    uvicorn.run(create_app(settings), host=host, port=listen_port, log_config=None)


@main.command()
@click.option("--url", default=DEFAULT_PROXY_URL, show_default=True, help="Proxy URL")
@click.option(
    "--interval",
    type=click.FloatRange(min=0.1),
    default=10.0,
    show_default=True,
    help="Seconds between refreshes",
)
@click.option("--once", is_flag=True, help="Fetch once and exit")
def watch(url: str, interval: float, once: bool) -> None:
    """Poll the proxy and print the seating chart."""

    def show(state: DashboardState) -> None:
        if not once:
            click.clear()
        click.echo(render_dashboard(state))

    async def run() -> None:
        client = ProxyClient(url)
        poller = Poller(client, DashboardState(), interval=interval, on_update=show)
        try:
            if once:
                await poller.poll_once()
                return
            poller.start()
            while poller.running:
                await asyncio.sleep(interval)
        finally:
            await poller.stop()
            await client.aclose()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


@main.command()
@click.argument("seat_number", type=int)
@click.option("--url", default=DEFAULT_PROXY_URL, show_default=True, help="Proxy URL")
@click.option("--approve", "ticket_id", type=int, default=None, help="Ticket ID to approve")
@click.option(
    "--pending-status-id",
    type=int,
    default=DEFAULT_PENDING_STATUS_ID,
    show_default=True,
    help="Status listed first",
)
def seat(seat_number: int, url: str, ticket_id: int | None, pending_status_id: int) -> None:
    """Show the tickets of the project at SEAT_NUMBER."""
    if not is_valid_seat(seat_number):
        raise click.BadParameter(f"{seat_number} is not on the classroom map")

    async def run() -> bool:
        client = ProxyClient(url)
        view = SeatDetailView(client, seat_number, pending_status_id=pending_status_id)
        try:
            await view.open()
            ok = view.error is None
            if ticket_id is not None and ok:
                ok = await view.approve(ticket_id)
        finally:
            await client.aclose()
        click.echo(render_seat_detail(view))
        return ok

    if not asyncio.run(run()):
        sys.exit(1)
