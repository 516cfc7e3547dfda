"""
Application facade for reserving and cancelling parking slots.

The engine composes the calendar, the booking and cancellation policies and
a reservation store. It keeps no reservation state of its own; the store is
the single serialization point for concurrent sessions.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

from pendulum import Date

from ..domain.booking_policy import BookingPolicy
from ..domain.calendar import today as local_today
from ..domain.calendar import week_dates
from ..domain.cancellation_policy import CancellationPolicy
from ..domain.exceptions import ReservationNotFoundError
from ..domain.models import Reservation, SlotKey, User
from ..domain.store import ReservationStoreProtocol

logger = logging.getLogger(__name__)


class BookingEngine:
    """
    Entry point used by the presentation layer.

    ``clock`` returns today's date; passing one in makes window checks
    deterministic.
    """

    def __init__(
        self,
        store: ReservationStoreProtocol,
        *,
        window_days: int,
        places: Iterable[int],
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self._store = store
        self._booking_policy = BookingPolicy(store, window_days=window_days, places=places)
        self._cancellation_policy = CancellationPolicy(store)
        self._clock = clock or local_today

    @property
    def places(self) -> List[int]:
        return sorted(self._booking_policy.places)

    def today(self) -> date:
        return self._clock()

    def reserve(
        self,
        requestor: User,
        slot: SlotKey,
        today: Optional[date] = None,
    ) -> Reservation:
        """Book a slot; see ``BookingPolicy.reserve`` for the failure modes."""
        reservation = self._booking_policy.reserve(
            requestor,
            slot,
            today=today if today is not None else self._clock(),
        )
        logger.info("Reservation %s created for user %s at %s", reservation.id, requestor.id, slot)
        return reservation

    def cancel(self, requestor: User, reservation_id: int) -> None:
        """
        Cancel a reservation by id.

        Raises:
            ReservationNotFoundError: If no reservation has that id
            ForbiddenError: If the requestor is neither owner nor admin
            AlreadyCancelledError: If it vanished while being cancelled
        """
        reservation = self._store.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation {reservation_id} does not exist")

        self._cancellation_policy.cancel(requestor, reservation)
        logger.info("Reservation %s cancelled by user %s", reservation_id, requestor.id)

    def snapshot(self) -> List[Reservation]:
        """All reservations ordered by id, for rendering the grid."""
        return self._store.list_all()

    def week_dates(self, week_offset: int = 0, today: Optional[date] = None) -> List[Date]:
        return week_dates(week_offset, today if today is not None else self._clock())
