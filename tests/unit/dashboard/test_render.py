"""Unit tests for the terminal rendering."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from seatwatch.dashboard import DashboardState, SeatDetailView, format_date, render_dashboard
from seatwatch.dashboard.render import render_seat_detail
from seatwatch.tracker import Ticket

COURSE = "組み込みシステム基礎"

IssueFactory = Callable[..., dict[str, Any]]


@pytest.mark.unit
class TestFormatDate:
    """Tests for format_date."""

    def test_missing(self) -> None:
        """Missing timestamps render as N/A."""
        assert format_date(None) == "N/A"
        assert format_date("") == "N/A"

    def test_invalid(self) -> None:
        """Unparsable timestamps render as N/A."""
        assert format_date("yesterday") == "N/A"

    def test_naive(self) -> None:
        """Timestamps render as YYYY/MM/DD HH:MM."""
        assert format_date("2025-04-01T09:30:00") == "2025/04/01 09:30"


@pytest.mark.unit
class TestRenderDashboard:
    """Tests for render_dashboard."""

    def test_highlights_pending_seats(self, make_issue: IssueFactory) -> None:
        """Pending seats are bracketed and listed."""
        state = DashboardState()
        state.apply_tickets(
            [
                Ticket.model_validate(make_issue(1, f"{COURSE} (3)")),
                Ticket.model_validate(make_issue(2, f"{COURSE} (77)")),
            ],
            now=datetime(2025, 5, 1, 10, 15, 30),
        )

        output = render_dashboard(state)

        assert "[ 3]" in output
        assert "[77]" in output
        assert "[ 4]" not in output
        assert "== 6-301 ==" in output
        assert "== 8-312 ==" in output
        assert "最終更新: 10:15:30" in output
        assert "審査待ち件数: 2" in output
        assert "審査待ち座席: 3, 77" in output

    def test_initial(self) -> None:
        """Before the first fetch nothing is highlighted."""
        output = render_dashboard(DashboardState())

        assert "--:--:--" in output
        assert "[" not in output.split("\n", 1)[1]


@pytest.mark.unit
class TestRenderSeatDetail:
    """Tests for render_seat_detail."""

    def test_groups_and_defaults(self, make_issue: IssueFactory) -> None:
        """Groups are listed with tickets; missing fields get defaults."""
        view = SeatDetailView(client=None, seat_number=9)  # type: ignore[arg-type]
        view.issues = (
            Ticket.model_validate(make_issue(1, "p", status_id=1, status_name="新規")),
            Ticket.model_validate(
                make_issue(
                    2, "p", priority={"id": 2, "name": "高め"}, author={"id": 1, "name": "A"}
                )
            ),
        )
        view.total_count = 2

        output = render_seat_detail(view)

        assert output.index("■ 審査待ち (1)") < output.index("■ 新規 (1)")
        assert "#1 Task 1 [通常]" in output
        assert "#2 Task 2 [高め]" in output
        assert "未設定" in output

    def test_empty(self) -> None:
        """No tickets shows a placeholder."""
        view = SeatDetailView(client=None, seat_number=9)  # type: ignore[arg-type]

        assert "チケットはありません" in render_seat_detail(view)

    def test_header_names_classroom(self) -> None:
        """The header carries the room the seat is in."""
        view = SeatDetailView(client=None, seat_number=50)  # type: ignore[arg-type]

        assert render_seat_detail(view).startswith("座席 50 (8-312) のチケット (0)")

    def test_description_lines_indented(self, make_issue: IssueFactory) -> None:
        """Each description line is shown under the ticket."""
        view = SeatDetailView(client=None, seat_number=9)  # type: ignore[arg-type]
        view.issues = (
            Ticket.model_validate(make_issue(1, "p", description="LED blinks\nTimer fixed")),
        )

        lines = render_seat_detail(view).splitlines()

        start = lines.index("    説明:")
        assert lines[start + 1 : start + 3] == ["      LED blinks", "      Timer fixed"]

    def test_missing_status_and_tracker(self, make_issue: IssueFactory) -> None:
        """A ticket without status or tracker is grouped under 未設定."""
        issue = make_issue(4, "p")
        del issue["status"]
        del issue["tracker"]
        view = SeatDetailView(client=None, seat_number=9)  # type: ignore[arg-type]
        view.issues = (Ticket.model_validate(issue),)

        output = render_seat_detail(view)

        assert "■ 未設定 (1)" in output
        assert "    未設定 / 未設定 / 作成: N/A" in output
        assert "説明:" not in output
