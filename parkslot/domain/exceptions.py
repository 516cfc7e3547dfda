"""
Domain-specific exception hierarchy for the parking reservation engine.
"""


class ParkingError(Exception):
    """Base class for all application-level errors."""


class SlotConflictError(ParkingError):
    """Raised by a store when the slot already holds a reservation."""


class ReservationMissingError(ParkingError):
    """Raised by a store when the reservation to delete does not exist."""


class StoreUnavailableError(ParkingError):
    """Raised when the persistence backend keeps failing after retries."""


class BookingError(ParkingError):
    """Base class for rejected booking requests."""


class SlotTakenError(BookingError):
    """Raised when somebody else already booked the requested slot."""


class WindowExceededError(BookingError):
    """Raised when a non-priority user books too far ahead."""

    def __init__(self, allowed: int, requested: int):
        self.allowed = allowed
        self.requested = requested
        super().__init__(
            f"Non-priority users may book at most {allowed} working day(s) ahead, "
            f"requested {requested}"
        )


class OutsideGridError(BookingError):
    """Raised when the slot is not part of the booking grid."""


class UnknownUserError(BookingError):
    """Raised when a reservation would reference a user outside the roster."""


class CancellationError(ParkingError):
    """Base class for rejected cancellation requests."""


class ForbiddenError(CancellationError):
    """Raised when the requestor neither owns the reservation nor is an admin."""


class AlreadyCancelledError(CancellationError):
    """Raised when the reservation disappeared before it could be deleted."""


class ReservationNotFoundError(CancellationError):
    """Raised when the reservation id is unknown."""
