"""
SQL-backed reservation store built on SQLModel.

The table carries a unique constraint over (place, date, time_slot), so the
database itself decides which of several concurrent inserts wins. The store
never looks a slot up before inserting it.
"""

import datetime as dt
import logging
import time
from typing import Callable, Iterable, List, Optional, TypeVar

import pendulum
from sqlalchemy import UniqueConstraint, delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Field, Session, SQLModel, create_engine, select

from ..domain.exceptions import (
    ReservationMissingError,
    SlotConflictError,
    StoreUnavailableError,
    UnknownUserError,
)
from ..domain.models import Reservation, SlotKey, TimeSlot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReservationRecord(SQLModel, table=True):
    """Row layout of the ``reservation`` table."""
    __tablename__ = "reservation"
    __table_args__ = (
        UniqueConstraint("place", "date", "time_slot", name="uq_reservation_slot"),
        # ids of deleted rows must never come back
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    place: int
    date: dt.date
    time_slot: str
    user_id: int = Field(index=True)
    created_at: dt.datetime


class SqlReservationStore:
    """
    Reservation store persisting to any SQLAlchemy-supported database.

    Transient failures (``OperationalError``: lost connection, locked
    database) are retried up to ``max_attempts`` times; after that a
    ``StoreUnavailableError`` is raised. Constraint violations are final and
    never retried.
    """

    def __init__(
        self,
        engine: Engine,
        user_ids: Optional[Iterable[int]] = None,
        max_attempts: int = 3,
        retry_delay_seconds: float = 0.05,
    ):
        """
        Initialize the store and create the table if needed.

        Args:
            engine: SQLAlchemy engine
            user_ids: Roster of valid user ids; ``None`` accepts any id
            max_attempts: Attempts per operation before giving up
            retry_delay_seconds: Base delay, multiplied by the attempt number
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self._engine = engine
        self._user_ids = frozenset(user_ids) if user_ids is not None else None
        self.max_attempts = max_attempts
        self.retry_delay_seconds = retry_delay_seconds

        SQLModel.metadata.create_all(engine, tables=[ReservationRecord.__table__])

    @classmethod
    def from_url(cls, database_url: str, **kwargs) -> "SqlReservationStore":
        """Create a store from a database URL such as ``sqlite:///parkslot.db``."""
        connect_args = {}
        if database_url.startswith("sqlite"):
            # sessions are opened from worker threads
            connect_args["check_same_thread"] = False

        engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
        return cls(engine, **kwargs)

    def try_create(self, slot: SlotKey, user_id: int) -> Reservation:
        if self._user_ids is not None and user_id not in self._user_ids:
            raise UnknownUserError(f"User {user_id} is not in the roster")

        started = pendulum.now("UTC")
        attempts = []

        def insert() -> Reservation:
            attempts.append(1)
            with Session(self._engine) as session:
                record = ReservationRecord(
                    place=slot.place,
                    date=dt.date(slot.date.year, slot.date.month, slot.date.day),
                    time_slot=slot.time_slot.value,
                    user_id=user_id,
                    created_at=pendulum.now("UTC"),
                )
                session.add(record)
                session.commit()
                session.refresh(record)
                return self._to_domain(record)

        try:
            reservation = self._with_retry("insert", insert)
        except IntegrityError as exc:
            if len(attempts) > 1:
                # an earlier attempt may have committed before the connection dropped
                existing = self.find(slot)
                if existing and existing.user_id == user_id and existing.created_at >= started:
                    logger.info("Recovered reservation %s for %s after retry", existing.id, slot)
                    return existing
            raise SlotConflictError(f"Slot {slot} is already reserved") from exc

        logger.info("Stored reservation %s for %s", reservation.id, slot)
        return reservation

    def delete(self, reservation_id: int) -> None:
        def remove() -> int:
            with self._engine.begin() as connection:
                result = connection.execute(
                    delete(ReservationRecord).where(ReservationRecord.id == reservation_id)
                )
                return result.rowcount

        if self._with_retry("delete", remove) == 0:
            raise ReservationMissingError(f"Reservation {reservation_id} not found")

        logger.info("Deleted reservation %s", reservation_id)

    def find(self, slot: SlotKey) -> Optional[Reservation]:
        def lookup() -> Optional[Reservation]:
            with Session(self._engine) as session:
                statement = select(ReservationRecord).where(
                    ReservationRecord.place == slot.place,
                    ReservationRecord.date == dt.date(slot.date.year, slot.date.month, slot.date.day),
                    ReservationRecord.time_slot == slot.time_slot.value,
                )
                record = session.exec(statement).first()
                return self._to_domain(record) if record else None

        return self._with_retry("find", lookup)

    def get(self, reservation_id: int) -> Optional[Reservation]:
        def lookup() -> Optional[Reservation]:
            with Session(self._engine) as session:
                record = session.get(ReservationRecord, reservation_id)
                return self._to_domain(record) if record else None

        return self._with_retry("get", lookup)

    def list_all(self) -> List[Reservation]:
        def load() -> List[Reservation]:
            with Session(self._engine) as session:
                records = session.exec(select(ReservationRecord).order_by(ReservationRecord.id)).all()
                return [self._to_domain(record) for record in records]

        return self._with_retry("list", load)

    def _with_retry(self, operation: str, action: Callable[[], T]) -> T:
        """
        Run ``action``, retrying on transient database errors.

        Raises:
            StoreUnavailableError: If every attempt failed
        """
        attempt = 1
        while True:
            try:
                return action()
            except OperationalError as exc:
                if attempt >= self.max_attempts:
                    raise StoreUnavailableError(
                        f"Reservation store unavailable during {operation}: {exc}"
                    ) from exc
                logger.warning(
                    "Store %s failed (attempt %d/%d): %s",
                    operation, attempt, self.max_attempts, exc,
                )
                time.sleep(self.retry_delay_seconds * attempt)
                attempt += 1

    @staticmethod
    def _to_domain(record: ReservationRecord) -> Reservation:
        return Reservation(
            id=record.id,
            slot=SlotKey(
                place=record.place,
                date=record.date,
                time_slot=TimeSlot(record.time_slot),
            ),
            user_id=record.user_id,
            created_at=pendulum.instance(record.created_at, tz="UTC").in_timezone("UTC"),
        )
