import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from grooming_booking.core.metrics import BOOKING_OPERATIONS
from grooming_booking.db.models import Booking
from grooming_booking.db.repository import BookingRepository
from grooming_booking.schemas.booking import BookingPayload, BookingReplacePayload

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND_DETAIL = "Booking not found"
CREATE_FAILED_DETAIL = "Failed to create booking"
QUERY_FAILED_DETAIL = "Failed to load bookings"
SEARCH_FAILED_DETAIL = "Failed to search bookings"
UPDATE_FAILED_DETAIL = "Failed to update booking"
DELETE_FAILED_DETAIL = "Failed to delete booking"


@contextmanager
def _store_operation(operation: str, failure_detail: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError:
        BOOKING_OPERATIONS.labels(operation=operation, outcome="error").inc()
        logger.exception("booking_%s_failed", operation)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_detail,
        ) from None
    BOOKING_OPERATIONS.labels(operation=operation, outcome="ok").inc()


def create_booking(repository: BookingRepository, payload: BookingPayload) -> Booking:
    with _store_operation("create", CREATE_FAILED_DETAIL):
        booking = repository.create(payload.to_record())
    logger.info("booking_created id=%s service_type=%s", booking.id, booking.service_type)
    return booking


def get_booking(repository: BookingRepository, booking_id: int) -> Booking:
    with _store_operation("get", QUERY_FAILED_DETAIL):
        booking = repository.get(booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=BOOKING_NOT_FOUND_DETAIL)
    return booking


def list_bookings(repository: BookingRepository) -> Sequence[Booking]:
    with _store_operation("list", QUERY_FAILED_DETAIL):
        return repository.list()


def search_bookings(repository: BookingRepository, keyword: str | None) -> Sequence[Booking]:
    """Substring search over owner name, phone number and pet name.

    A missing or empty keyword returns every booking, exactly like
    :func:`list_bookings`.
    """
    if not keyword:
        return list_bookings(repository)
    with _store_operation("search", SEARCH_FAILED_DETAIL):
        return repository.search(keyword)


def update_booking(repository: BookingRepository, booking_id: int, payload: BookingReplacePayload) -> int:
    with _store_operation("update", UPDATE_FAILED_DETAIL):
        affected = repository.update(booking_id, payload.to_record())
    if affected == 0:
        logger.info("booking_update_missed id=%s", booking_id)
    else:
        logger.info("booking_updated id=%s", booking_id)
    return affected


def delete_booking(repository: BookingRepository, booking_id: int) -> int:
    with _store_operation("delete", DELETE_FAILED_DETAIL):
        affected = repository.delete(booking_id)
    if affected == 0:
        logger.info("booking_delete_missed id=%s", booking_id)
    else:
        logger.info("booking_deleted id=%s", booking_id)
    return affected
