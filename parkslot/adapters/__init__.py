"""
Adapters - reservation stores backing the booking engine.
"""

from .memory_store import InMemoryReservationStore
from .sql_store import ReservationRecord, SqlReservationStore

__all__ = ["InMemoryReservationStore", "ReservationRecord", "SqlReservationStore"]
