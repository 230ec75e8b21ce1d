"""Unit tests for seat and status grouping."""

from collections.abc import Callable
from typing import Any

import pytest

from seatwatch.seating import group_by_seat, group_by_status, highlighted_seats
from seatwatch.tracker import Ticket

COURSE = "組み込みシステム基礎"

IssueFactory = Callable[..., dict[str, Any]]


def _tickets(*issues: dict[str, Any]) -> list[Ticket]:
    return [Ticket.model_validate(issue) for issue in issues]


@pytest.mark.unit
class TestGroupBySeat:
    """Tests for group_by_seat."""

    def test_groups_by_resolved_seat(self, make_issue: IssueFactory) -> None:
        """Only seats with tickets appear, in source order."""
        tickets = _tickets(
            make_issue(1, f"{COURSE} (3)"),
            make_issue(2, "Other course"),
            make_issue(3, f"{COURSE} (5)"),
            make_issue(4, f"{COURSE} (3)"),
        )

        index = group_by_seat(tickets)

        assert set(index) == {3, 5}
        assert [t.id for t in index[3]] == [1, 4]
        assert [t.id for t in index[5]] == [3]

    def test_empty(self) -> None:
        """No tickets, no seats."""
        assert group_by_seat([]) == {}

    def test_out_of_range_seat_dropped(self, make_issue: IssueFactory) -> None:
        """Tickets of projects numbered outside the map are dropped."""
        index = group_by_seat(_tickets(make_issue(1, f"{COURSE} (81)")))

        assert index == {}

    def test_highlighted_seats(self, make_issue: IssueFactory) -> None:
        """Highlighted seats are the index keys."""
        index = group_by_seat(
            _tickets(make_issue(1, f"{COURSE} (3)"), make_issue(2, f"{COURSE} (5)"))
        )

        assert highlighted_seats(index) == frozenset({3, 5})


@pytest.mark.unit
class TestGroupByStatus:
    """Tests for group_by_status."""

    def test_pending_first_then_ascending(self, make_issue: IssueFactory) -> None:
        """Pending-review group sorts first, others by status id."""
        tickets = _tickets(
            make_issue(1, "p", status_id=2, status_name="進行中"),
            make_issue(2, "p", status_id=4, status_name="審査待ち"),
            make_issue(3, "p", status_id=1, status_name="新規"),
            make_issue(4, "p", status_id=4, status_name="審査待ち"),
        )

        groups = group_by_status(tickets, pending_status_id=4)

        assert [g.status_id for g in groups] == [4, 1, 2]
        assert groups[0].status_name == "審査待ち"
        assert [t.id for t in groups[0].tickets] == [2, 4]

    def test_no_pending_group(self, make_issue: IssueFactory) -> None:
        """Without pending tickets, groups are purely ascending."""
        tickets = _tickets(
            make_issue(1, "p", status_id=3, status_name="審査通過"),
            make_issue(2, "p", status_id=1, status_name="新規"),
        )

        groups = group_by_status(tickets, pending_status_id=4)

        assert [g.status_id for g in groups] == [1, 3]

    def test_input_not_mutated(self, make_issue: IssueFactory) -> None:
        """Grouping leaves the input list untouched."""
        tickets = _tickets(
            make_issue(1, "p", status_id=2, status_name="進行中"),
            make_issue(2, "p", status_id=4, status_name="審査待ち"),
        )
        before = list(tickets)

        group_by_status(tickets, pending_status_id=4)

        assert tickets == before

    def test_empty(self) -> None:
        """No tickets, no groups."""
        assert group_by_status([], pending_status_id=4) == []
