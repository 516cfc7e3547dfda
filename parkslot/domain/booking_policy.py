"""
Admissibility rules for new reservations.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from .calendar import is_working_day, working_days_between
from .exceptions import (
    OutsideGridError,
    SlotConflictError,
    SlotTakenError,
    WindowExceededError,
)
from .models import Reservation, SlotKey, User
from .store import ReservationStoreProtocol

logger = logging.getLogger(__name__)


class BookingPolicy:
    """
    Validates a booking request and hands the insert over to the store.

    Rules, in order:
    1. The slot has to be part of the grid (known place, working day).
    2. Non-priority users may book at most ``window_days`` working days ahead.
    3. The store decides who wins the slot.
    """

    def __init__(
        self,
        store: ReservationStoreProtocol,
        window_days: int,
        places: Iterable[int],
    ) -> None:
        if window_days <= 0:
            raise ValueError(f"window_days must be positive, got {window_days}")
        self._store = store
        self.window_days = window_days
        self.places = frozenset(places)

    def reserve(self, requestor: User, slot: SlotKey, today: date) -> Reservation:
        """
        Book ``slot`` for ``requestor``.

        Raises:
            OutsideGridError: If the slot is not bookable at all
            WindowExceededError: If a non-priority user books too far ahead
            SlotTakenError: If the slot is already reserved
        """
        self._check_grid(slot)

        if not requestor.priority:
            requested = working_days_between(today, slot.date)
            if requested > self.window_days:
                logger.info(
                    "User %s rejected for %s: %d working days ahead, %d allowed",
                    requestor.id, slot, requested, self.window_days,
                )
                raise WindowExceededError(allowed=self.window_days, requested=requested)

        try:
            return self._store.try_create(slot, requestor.id)
        except SlotConflictError as exc:
            logger.info("User %s lost %s: slot already taken", requestor.id, slot)
            raise SlotTakenError(f"Slot {slot} is already reserved") from exc

    def _check_grid(self, slot: SlotKey) -> None:
        if slot.place not in self.places:
            raise OutsideGridError(f"Unknown parking place {slot.place}")
        if not is_working_day(slot.date):
            raise OutsideGridError(f"{slot.date.isoformat()} is not a working day")
