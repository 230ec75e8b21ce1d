"""The fixed classroom map: two rooms, seats 1-80."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SeatGroup:
    """A block of seats drawn together in one colour.

    ``margin_top`` is the gap above the block in pixels (0 = none).
    """

    seats: tuple[int, ...]
    color_class: str
    margin_top: int = 0


@dataclass(frozen=True)
class Classroom:
    """A room, drawn as side-by-side columns of seat groups."""

    title: str
    columns: tuple[tuple[SeatGroup, ...], ...]

    @property
    def seats(self) -> tuple[int, ...]:
        return tuple(seat for column in self.columns for group in column for seat in group.seats)


GROUP_GAP = 20


def _group(first: int, last: int, color_class: str, margin_top: int = 0) -> SeatGroup:
    return SeatGroup(tuple(range(first, last + 1)), color_class, margin_top)


CLASSROOMS: tuple[Classroom, ...] = (
    Classroom(
        title="6-301",
        columns=(
            (
                _group(1, 8, "blue-1"),
                _group(9, 12, "blue-1", GROUP_GAP),
                _group(13, 16, "pink-1"),
                _group(17, 24, "pink-1", GROUP_GAP),
            ),
            (
                _group(25, 32, "green-1"),
                _group(33, 36, "green-1", GROUP_GAP),
                _group(37, 40, "purple-1"),
                _group(41, 48, "purple-1", GROUP_GAP),
            ),
        ),
    ),
    Classroom(
        title="8-312",
        columns=(
            (
                _group(49, 52, "blue-2"),
                _group(53, 56, "blue-2", GROUP_GAP),
                _group(57, 60, "blue-2", GROUP_GAP),
            ),
            (
                _group(61, 64, "blue-2"),
                _group(65, 68, "orange-1", GROUP_GAP),
                _group(69, 72, "orange-2", GROUP_GAP),
            ),
            (
                _group(73, 76, "orange-1", 84),
                _group(77, 80, "orange-1", GROUP_GAP),
            ),
        ),
    ),
)


def all_seats() -> tuple[int, ...]:
    """Every seat in layout order."""
    return tuple(seat for room in CLASSROOMS for seat in room.seats)


def classroom_of(seat_number: int) -> Classroom | None:
    """The room containing a seat, or None for seats not on the map."""
    for room in CLASSROOMS:
        if seat_number in room.seats:
            return room
    return None
