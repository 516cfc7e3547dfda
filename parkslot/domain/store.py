"""
Contract every reservation store must fulfil.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Reservation, SlotKey


class ReservationStoreProtocol(Protocol):
    """
    Authoritative collection of reservations.

    Implementations own the uniqueness invariant: ``try_create`` is a single
    atomic create-if-absent, never a lookup followed by an insert.
    """

    def try_create(self, slot: SlotKey, user_id: int) -> Reservation:
        """Create a reservation or raise ``SlotConflictError``."""

    def delete(self, reservation_id: int) -> None:
        """Remove a reservation or raise ``ReservationMissingError``."""

    def find(self, slot: SlotKey) -> Optional[Reservation]:
        """Return the reservation holding the slot, if any."""

    def get(self, reservation_id: int) -> Optional[Reservation]:
        """Return the reservation with the given id, if any."""

    def list_all(self) -> List[Reservation]:
        """Return all reservations ordered by id."""
