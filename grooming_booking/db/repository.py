import itertools
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from grooming_booking.core.config import settings
from grooming_booking.db.models import Booking

SEARCHABLE_FIELDS = ("owner_name", "phone_number", "pet_name")


class BookingRepository(ABC):
    @abstractmethod
    def create(self, fields: dict[str, Any]) -> Booking:
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: int) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> Sequence[Booking]:
        raise NotImplementedError

    @abstractmethod
    def search(self, keyword: str) -> Sequence[Booking]:
        raise NotImplementedError

    @abstractmethod
    def update(self, booking_id: int, fields: dict[str, Any]) -> int:
        """Overwrite every mutable field; returns the number of rows touched."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: int) -> int:
        raise NotImplementedError


class SqlBookingRepository(BookingRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def _commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

    def create(self, fields: dict[str, Any]) -> Booking:
        booking = Booking(**fields)
        self._db.add(booking)
        self._commit()
        self._db.refresh(booking)
        return booking

    def get(self, booking_id: int) -> Booking | None:
        return self._db.scalar(select(Booking).where(Booking.id == booking_id))

    def list(self) -> Sequence[Booking]:
        return self._db.scalars(
            select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        ).all()

    def search(self, keyword: str) -> Sequence[Booking]:
        condition = or_(
            *(getattr(Booking, field).icontains(keyword, autoescape=True) for field in SEARCHABLE_FIELDS)
        )
        return self._db.scalars(
            select(Booking).where(condition).order_by(Booking.created_at.desc(), Booking.id.desc())
        ).all()

    def update(self, booking_id: int, fields: dict[str, Any]) -> int:
        try:
            result = self._db.execute(update(Booking).where(Booking.id == booking_id).values(**fields))
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._commit()
        return result.rowcount

    def delete(self, booking_id: int) -> int:
        try:
            result = self._db.execute(delete(Booking).where(Booking.id == booking_id))
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._commit()
        return result.rowcount


class InMemoryBookingRepository(BookingRepository):
    """Keeps bookings in a dict; callers always receive detached copies."""

    def __init__(self) -> None:
        self._rows: dict[int, Booking] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    @staticmethod
    def _snapshot(booking: Booking) -> Booking:
        return Booking(**{column.key: getattr(booking, column.key) for column in Booking.__table__.columns})

    @staticmethod
    def _newest_first(rows: list[Booking]) -> list[Booking]:
        return sorted(rows, key=lambda booking: (booking.created_at, booking.id), reverse=True)

    def create(self, fields: dict[str, Any]) -> Booking:
        now = datetime.now(UTC)
        with self._lock:
            booking = Booking(id=next(self._ids), created_at=now, updated_at=now, **fields)
            self._rows[booking.id] = booking
            return self._snapshot(booking)

    def get(self, booking_id: int) -> Booking | None:
        with self._lock:
            booking = self._rows.get(booking_id)
            return None if booking is None else self._snapshot(booking)

    def list(self) -> Sequence[Booking]:
        with self._lock:
            return self._newest_first([self._snapshot(booking) for booking in self._rows.values()])

    def search(self, keyword: str) -> Sequence[Booking]:
        needle = keyword.lower()
        with self._lock:
            matches = [
                self._snapshot(booking)
                for booking in self._rows.values()
                if any(needle in (getattr(booking, field) or "").lower() for field in SEARCHABLE_FIELDS)
            ]
        return self._newest_first(matches)

    def update(self, booking_id: int, fields: dict[str, Any]) -> int:
        with self._lock:
            booking = self._rows.get(booking_id)
            if booking is None:
                return 0
            for field, value in fields.items():
                setattr(booking, field, value)
            booking.updated_at = datetime.now(UTC)
            return 1

    def delete(self, booking_id: int) -> int:
        with self._lock:
            return 1 if self._rows.pop(booking_id, None) is not None else 0

    def reset(self) -> None:
        with self._lock:
            self._rows.clear()
            self._ids = itertools.count(1)


memory_repository = InMemoryBookingRepository()


def build_booking_repository(db: Session, backend: str | None = None) -> BookingRepository:
    if (backend or settings.booking_store_backend) == "memory":
        return memory_repository
    return SqlBookingRepository(db)
