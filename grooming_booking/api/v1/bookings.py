from fastapi import APIRouter, Depends, Query, status

from grooming_booking.api.deps import get_booking_repository
from grooming_booking.db.repository import BookingRepository
from grooming_booking.schemas.booking import (
    BookingActionResponse,
    BookingCreatedResponse,
    BookingPayload,
    BookingReplacePayload,
    BookingResponse,
)
from grooming_booking.services.booking_service import (
    create_booking,
    delete_booking,
    get_booking,
    search_bookings,
    update_booking,
)

router = APIRouter(tags=["bookings"])


def _created_response(repository: BookingRepository, payload: BookingPayload) -> BookingCreatedResponse:
    booking = create_booking(repository=repository, payload=payload)
    return BookingCreatedResponse(
        message="Booking submitted",
        id=booking.id,
        booking=BookingResponse.model_validate(booking),
    )


@router.post("/", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
def submit_intake_form(
    payload: BookingPayload,
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingCreatedResponse:
    return _created_response(repository=repository, payload=payload)


@router.post("/bookings", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_new_booking(
    payload: BookingPayload,
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingCreatedResponse:
    return _created_response(repository=repository, payload=payload)


@router.get("/bookings", response_model=list[BookingResponse], status_code=status.HTTP_200_OK)
def list_all_bookings(
    keyword: str | None = Query(default=None),
    repository: BookingRepository = Depends(get_booking_repository),
) -> list[BookingResponse]:
    bookings = search_bookings(repository=repository, keyword=keyword)
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.get("/bookings/{booking_id}", response_model=BookingResponse, status_code=status.HTTP_200_OK)
def get_booking_by_id(
    booking_id: int,
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingResponse:
    return BookingResponse.model_validate(get_booking(repository=repository, booking_id=booking_id))


@router.put("/bookings/{booking_id}", response_model=BookingActionResponse, status_code=status.HTTP_200_OK)
def replace_booking(
    booking_id: int,
    payload: BookingReplacePayload,
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingActionResponse:
    update_booking(repository=repository, booking_id=booking_id, payload=payload)
    return BookingActionResponse(message="Booking updated")


@router.delete("/bookings/{booking_id}", response_model=BookingActionResponse, status_code=status.HTTP_200_OK)
def remove_booking(
    booking_id: int,
    repository: BookingRepository = Depends(get_booking_repository),
) -> BookingActionResponse:
    delete_booking(repository=repository, booking_id=booking_id)
    return BookingActionResponse(message="Booking deleted")


@router.get("/search/bookings", response_model=list[BookingResponse], status_code=status.HTTP_200_OK)
def search_bookings_by_keyword(
    keyword: str | None = Query(default=None),
    repository: BookingRepository = Depends(get_booking_repository),
) -> list[BookingResponse]:
    bookings = search_bookings(repository=repository, keyword=keyword)
    return [BookingResponse.model_validate(booking) for booking in bookings]
