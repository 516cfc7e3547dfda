"""
Read model of one week of the booking grid, used by the presentation layer.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from pendulum import Date

from .cancellation_policy import can_cancel
from .models import Reservation, SlotKey, TimeSlot, User


@dataclass(frozen=True)
class GridCell:
    """One place in one time slot of one day, with its booking if any."""
    slot: SlotKey
    reservation: Optional[Reservation] = None
    owner: Optional[User] = None

    @property
    def is_free(self) -> bool:
        return self.reservation is None

    @property
    def is_priority(self) -> bool:
        """Whether the slot is held by a priority user."""
        return self.owner is not None and self.owner.priority

    def format_display(self) -> str:
        """
        Format the cell for display.
        Format: Name (plate) or "volno" for a free slot
        """
        if self.reservation is None:
            return "volno"
        if self.owner is None:
            return f"#{self.reservation.user_id}"

        text = self.owner.display_name or f"#{self.owner.id}"
        if self.owner.plate_number:
            text = f"{text} ({self.owner.plate_number})"
        return text


@dataclass
class WeekGrid:
    """
    Five working days x two time slots x the configured places.
    """
    dates: List[Date]
    places: List[int]
    cells: Dict[SlotKey, GridCell] = field(default_factory=dict)

    def cell(self, slot: SlotKey) -> GridCell:
        return self.cells[slot]

    def rows(self) -> List[tuple]:
        """
        Rows of (time slot, place, cells for Monday..Friday).
        """
        result = []
        for time_slot in TimeSlot:
            for place in self.places:
                day_cells = [
                    self.cells[SlotKey(place=place, date=day, time_slot=time_slot)]
                    for day in self.dates
                ]
                result.append((time_slot, place, day_cells))
        return result

    def cancellable_by(self, viewer: User) -> List[GridCell]:
        """Booked cells the viewer is allowed to cancel."""
        return [
            cell for cell in self.cells.values()
            if cell.reservation is not None and can_cancel(viewer, cell.reservation)
        ]


def build_week_grid(
    dates: Sequence[Date],
    places: Iterable[int],
    reservations: Iterable[Reservation],
    users: Iterable[User] = (),
) -> WeekGrid:
    """
    Join the week's slots with a reservation snapshot.

    Args:
        dates: Monday..Friday of the week to show
        places: Configured parking places
        reservations: Snapshot from the engine, any weeks
        users: Known users, for owner names and priority marks

    Returns:
        WeekGrid with one cell per slot
    """
    by_slot = {reservation.slot: reservation for reservation in reservations}
    users_by_id = {user.id: user for user in users}
    place_list = sorted(places)

    grid = WeekGrid(dates=list(dates), places=place_list)
    for day in grid.dates:
        for time_slot in TimeSlot:
            for place in place_list:
                slot = SlotKey(place=place, date=day, time_slot=time_slot)
                reservation = by_slot.get(slot)
                owner = users_by_id.get(reservation.user_id) if reservation else None
                grid.cells[slot] = GridCell(slot=slot, reservation=reservation, owner=owner)

    return grid
