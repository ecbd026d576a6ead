from fastapi import Depends
from sqlalchemy.orm import Session

from grooming_booking.db.repository import BookingRepository, build_booking_repository
from grooming_booking.db.session import get_db


def get_booking_repository(db: Session = Depends(get_db)) -> BookingRepository:
    return build_booking_repository(db)
