"""
In-process reservation store for tests and single-process use.
"""

import itertools
import logging
import threading
from typing import Dict, Iterable, List, Optional

import pendulum

from ..domain.exceptions import ReservationMissingError, SlotConflictError, UnknownUserError
from ..domain.models import Reservation, SlotKey

logger = logging.getLogger(__name__)


class InMemoryReservationStore:
    """
    Keeps reservations in dictionaries guarded by one lock.

    Check-and-insert happens while holding the lock, so concurrent callers
    racing for the same slot see exactly one winner. Ids come from a counter
    and are never handed out twice.
    """

    def __init__(self, user_ids: Optional[Iterable[int]] = None):
        """
        Initialize the store.

        Args:
            user_ids: Roster of valid user ids; ``None`` accepts any id
        """
        self._user_ids = frozenset(user_ids) if user_ids is not None else None
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._by_id: Dict[int, Reservation] = {}
        self._by_slot: Dict[SlotKey, Reservation] = {}

    def try_create(self, slot: SlotKey, user_id: int) -> Reservation:
        if self._user_ids is not None and user_id not in self._user_ids:
            raise UnknownUserError(f"User {user_id} is not in the roster")

        with self._lock:
            if slot in self._by_slot:
                raise SlotConflictError(f"Slot {slot} is already reserved")

            reservation = Reservation(
                id=next(self._ids),
                slot=slot,
                user_id=user_id,
                created_at=pendulum.now("UTC"),
            )
            self._by_slot[slot] = reservation
            self._by_id[reservation.id] = reservation

        logger.info("Stored reservation %s for %s", reservation.id, slot)
        return reservation

    def delete(self, reservation_id: int) -> None:
        with self._lock:
            reservation = self._by_id.pop(reservation_id, None)
            if reservation is None:
                raise ReservationMissingError(f"Reservation {reservation_id} not found")
            del self._by_slot[reservation.slot]

        logger.info("Deleted reservation %s", reservation_id)

    def find(self, slot: SlotKey) -> Optional[Reservation]:
        with self._lock:
            return self._by_slot.get(slot)

    def get(self, reservation_id: int) -> Optional[Reservation]:
        with self._lock:
            return self._by_id.get(reservation_id)

    def list_all(self) -> List[Reservation]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda r: r.id)
