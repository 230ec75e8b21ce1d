"""Plain-text rendering of the seating chart and seat detail."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from seatwatch.dashboard.state import ConnectionStatus
from seatwatch.seating import CLASSROOMS, SeatGroup, classroom_of

if TYPE_CHECKING:
    from seatwatch.dashboard.seat_detail import SeatDetailView
    from seatwatch.dashboard.state import DashboardState

STATUS_MARK = {
    ConnectionStatus.CONNECTING: "○",
    ConnectionStatus.OK: "●",
    ConnectionStatus.ERROR: "✕",
}


def format_date(value: str | None) -> str:
    """Format a tracker timestamp as "YYYY/MM/DD HH:MM" ("N/A" if missing)."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "N/A"
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y/%m/%d %H:%M")


def _seat_cell(seat_number: int, highlighted: frozenset[int]) -> str:
    if seat_number in highlighted:
        return f"[{seat_number:>2}]"
    return f" {seat_number:>2} "


def _group_line(group: SeatGroup, highlighted: frozenset[int]) -> str:
    cells = "".join(_seat_cell(seat, highlighted) for seat in group.seats)
    return f"  {group.color_class:<9}{cells}"


def render_status_bar(state: DashboardState) -> str:
    last = state.last_updated.strftime("%H:%M:%S") if state.last_updated else "--:--:--"
    return (
        f"{STATUS_MARK[state.status]} {state.status_text}"
        f" | 最終更新: {last}"
        f" | 審査待ち件数: {state.ticket_count}"
    )


def render_dashboard(state: DashboardState) -> str:
    """Render the status bar and both classrooms; pending seats are bracketed."""
    lines = [render_status_bar(state), ""]
    for room in CLASSROOMS:
        lines.append(f"== {room.title} ==")
        for column in room.columns:
            for group in column:
                if group.margin_top:
                    lines.append("")
                lines.append(_group_line(group, state.highlighted_seats))
            lines.append("")

    pending = sorted(state.highlighted_seats)
    if pending:
        lines.append("審査待ち座席: " + ", ".join(str(seat) for seat in pending))
    return "\n".join(lines).rstrip() + "\n"


def render_seat_detail(view: SeatDetailView) -> str:
    """Render one seat's tickets grouped by status."""
    room = classroom_of(view.seat_number)
    where = f"座席 {view.seat_number} ({room.title})" if room else f"座席 {view.seat_number}"
    lines = [f"{where} のチケット ({view.total_count})"]
    if view.error:
        lines.append(f"エラー: {view.error}")
    if view.message:
        lines.append(view.message)

    groups = view.groups()
    if not groups:
        lines.append("チケットはありません")

    for group in groups:
        lines.append(f"■ {group.status_name or '未設定'} ({len(group.tickets)})")
        for ticket in group.tickets:
            priority = ticket.priority.name if ticket.priority else "通常"
            author = ticket.author.name if ticket.author else "未設定"
            lines.append(f"  #{ticket.id} {ticket.subject} [{priority}]")
            lines.append(
                f"    {ticket.tracker.name or '未設定'} / {author}"
                f" / 作成: {format_date(ticket.created_on)}"
                f" / 更新: {format_date(ticket.updated_on)}"
            )
            if ticket.description:
                lines.append("    説明:")
                lines.extend(f"      {line}" for line in ticket.description.splitlines())
    return "\n".join(lines) + "\n"
