from datetime import UTC, datetime, timedelta

import pytest

from grooming_booking.db import repository as repository_module
from grooming_booking.db.repository import (
    InMemoryBookingRepository,
    SqlBookingRepository,
    build_booking_repository,
    memory_repository,
)


def _fields(**overrides) -> dict:
    fields = {
        "owner_name": "Lee",
        "phone_number": "0912345678",
        "pet_name": "Mochi",
        "breed": None,
        "gender": "F",
        "is_neutered": True,
        "weight": None,
        "medical_details": None,
        "is_taking_medication": False,
        "medication_details": None,
        "personality": None,
        "service_type": "unspecified",
        "photo_consent": False,
        "is_agreed": True,
    }
    fields.update(overrides)
    return fields


@pytest.fixture(params=["sql", "memory"])
def repository(request, db_session):
    if request.param == "sql":
        return SqlBookingRepository(db_session)
    return InMemoryBookingRepository()


def test_create_assigns_id_and_timestamps(repository):
    booking = repository.create(_fields())

    assert booking.id is not None
    assert booking.created_at is not None
    assert booking.updated_at is not None
    assert repository.get(booking.id).pet_name == "Mochi"


def test_get_missing_returns_none(repository):
    assert repository.get(404) is None


def test_update_reports_affected_rows(repository):
    booking = repository.create(_fields())

    assert repository.update(booking.id, _fields(pet_name="Bao", breed="Corgi")) == 1
    assert repository.update(booking.id + 100, _fields()) == 0

    stored = repository.get(booking.id)
    assert stored.pet_name == "Bao"
    assert stored.breed == "Corgi"


def test_delete_reports_affected_rows(repository):
    booking = repository.create(_fields())

    assert repository.delete(booking.id) == 1
    assert repository.delete(booking.id) == 0
    assert repository.get(booking.id) is None


def test_search_is_case_insensitive_or_across_fields(repository):
    by_owner = repository.create(_fields(owner_name="Wang"))
    by_phone = repository.create(_fields(phone_number="0955123123"))
    by_pet = repository.create(_fields(pet_name="Wangzai"))
    repository.create(_fields())

    matches = repository.search("wang")

    assert {booking.id for booking in matches} == {by_owner.id, by_pet.id}
    assert [booking.id for booking in repository.search("5512")] == [by_phone.id]


def test_search_escapes_like_wildcards(repository):
    repository.create(_fields(pet_name="Mochi_1"))
    repository.create(_fields(pet_name="Mochix1"))

    assert [booking.pet_name for booking in repository.search("i_1")] == ["Mochi_1"]


def test_list_orders_newest_first(repository):
    first = repository.create(_fields())
    second = repository.create(_fields())
    third = repository.create(_fields())

    assert [booking.id for booking in repository.list()] == [third.id, second.id, first.id]


def test_memory_list_orders_by_creation_time(monkeypatch):
    tomorrow = datetime.now(UTC) + timedelta(days=1)
    clock = iter([tomorrow, tomorrow - timedelta(days=2)])

    class ScriptedClock:
        @staticmethod
        def now(tz=None):
            return next(clock)

    monkeypatch.setattr(repository_module, "datetime", ScriptedClock)
    repository = InMemoryBookingRepository()
    later = repository.create(_fields())
    earlier = repository.create(_fields())

    assert [booking.id for booking in repository.list()] == [later.id, earlier.id]


def test_memory_reads_are_detached_from_stored_rows():
    repository = InMemoryBookingRepository()
    booking = repository.create(_fields())
    before_update = repository.get(booking.id)

    before_update.pet_name = "Edited locally"
    repository.update(booking.id, _fields(pet_name="Bao"))

    assert before_update.pet_name == "Edited locally"
    assert repository.get(booking.id).pet_name == "Bao"
    assert repository.list()[0].pet_name == "Bao"


def test_build_booking_repository_selects_backend(db_session):
    assert isinstance(build_booking_repository(db_session, backend="sql"), SqlBookingRepository)
    assert build_booking_repository(db_session, backend="memory") is memory_repository
    assert isinstance(build_booking_repository(db_session), SqlBookingRepository)
