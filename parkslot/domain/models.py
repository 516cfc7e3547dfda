"""
Domain models for users, slot keys and reservations.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

import pendulum
from pendulum import Date, DateTime


class Role(str, Enum):
    """Roles handed over by the identity provider."""
    ADMIN = "admin"
    USER = "user"


class TimeSlot(str, Enum):
    """
    The two bookable parts of a working day.

    Values are the labels shown in the booking grid.
    """
    MORNING = "7-13"
    AFTERNOON = "13-00"


@dataclass(frozen=True)
class User:
    """
    An authenticated user as supplied by the identity provider.

    The engine trusts these fields and never checks credentials.
    """
    id: int
    role: Role = Role.USER
    priority: bool = False
    display_name: str = ""
    plate_number: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def as_date(value: date) -> Date:
    """Normalise any ``datetime.date`` (or datetime) to a pendulum ``Date``."""
    return pendulum.date(value.year, value.month, value.day)


@dataclass(frozen=True)
class SlotKey:
    """
    Coordinate of one bookable unit in the grid: place, day and time slot.

    Keyed on an absolute date so slots from different weeks never collide.
    """
    place: int
    date: Date
    time_slot: TimeSlot

    def __post_init__(self):
        object.__setattr__(self, "date", as_date(self.date))
        object.__setattr__(self, "time_slot", TimeSlot(self.time_slot))

    def __str__(self) -> str:
        return f"place {self.place}, {self.date.isoformat()} {self.time_slot.value}"


@dataclass(frozen=True)
class Reservation:
    """
    A booked slot.

    Reservations are never edited; moving one is a cancel followed by a new
    reservation.
    """
    id: int
    slot: SlotKey
    user_id: int
    created_at: DateTime
