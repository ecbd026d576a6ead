from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from grooming_booking.db.base import Base
from grooming_booking.db.models import Booking
from grooming_booking.db.repository import SqlBookingRepository
from grooming_booking.schemas.booking import BookingPayload


@pytest.mark.concurrent
def test_parallel_intake_assigns_distinct_ids(tmp_path):
    db_file = tmp_path / "intake.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_file}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)

    def submit(index: int) -> int:
        payload = BookingPayload(
            owner_name=f"Owner {index}",
            phone_number=f"09000000{index:02d}",
            pet_name=f"Pet {index}",
            gender="F",
            is_neutered=True,
            is_taking_medication=False,
            is_agreed=True,
        )
        db = SessionLocal()
        try:
            return SqlBookingRepository(db).create(payload.to_record()).id
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=8) as executor:
        ids = list(executor.map(submit, range(20)))

    assert len(set(ids)) == 20

    verify_session = SessionLocal()
    try:
        assert verify_session.scalar(select(func.count()).select_from(Booking)) == 20
    finally:
        verify_session.close()
        engine.dispose()
