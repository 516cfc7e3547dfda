"""
Domain layer - Pure business logic without external dependencies.
"""

from .booking_policy import BookingPolicy
from .cancellation_policy import CancellationPolicy, can_cancel
from .grid import GridCell, WeekGrid, build_week_grid
from .models import Reservation, Role, SlotKey, TimeSlot, User
from .store import ReservationStoreProtocol

__all__ = [
    "BookingPolicy",
    "CancellationPolicy",
    "GridCell",
    "Reservation",
    "ReservationStoreProtocol",
    "Role",
    "SlotKey",
    "TimeSlot",
    "User",
    "WeekGrid",
    "build_week_grid",
    "can_cancel",
]
