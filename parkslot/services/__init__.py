"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from ..domain.store import ReservationStoreProtocol
from .booking_engine import BookingEngine

__all__ = ["BookingEngine", "ReservationStoreProtocol"]
