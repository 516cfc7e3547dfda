"""
Authorization rule for cancelling reservations.
"""

from __future__ import annotations

from .exceptions import AlreadyCancelledError, ForbiddenError, ReservationMissingError
from .models import Reservation, User
from .store import ReservationStoreProtocol


def can_cancel(requestor: User, reservation: Reservation) -> bool:
    """Admins may cancel anything, everybody else only their own bookings."""
    return requestor.is_admin or requestor.id == reservation.user_id


class CancellationPolicy:
    """Checks ownership and deletes the reservation through the store."""

    def __init__(self, store: ReservationStoreProtocol) -> None:
        self._store = store

    def cancel(self, requestor: User, reservation: Reservation) -> None:
        if not can_cancel(requestor, reservation):
            raise ForbiddenError(
                f"User {requestor.id} may not cancel reservation {reservation.id}"
            )

        try:
            self._store.delete(reservation.id)
        except ReservationMissingError as exc:
            # another session got there first
            raise AlreadyCancelledError(
                f"Reservation {reservation.id} was already cancelled"
            ) from exc
