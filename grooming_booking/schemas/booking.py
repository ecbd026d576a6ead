from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_pascal

from grooming_booking.db.models import SERVICE_TYPE_UNSPECIFIED

TRUTHY_FLAG_VALUES = frozenset({"true", "1", "yes", "on"})

ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
PhoneNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=30)]
Gender = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]


def coerce_flag(value: Any) -> Any:
    """Turn checkbox-style form values into booleans.

    Blank strings become ``None`` so that a required flag submitted empty is
    reported as missing rather than silently stored as false.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return None
        return normalized in TRUTHY_FLAG_VALUES
    if isinstance(value, int | float):
        return bool(value)
    return value


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


WEIGHT_STEP = Decimal("0.01")
MAX_WEIGHT = Decimal("9999.99")


class _BookingFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="ignore")

    owner_name: ShortText
    phone_number: PhoneNumber
    pet_name: ShortText
    breed: str | None = Field(default=None, max_length=100)
    gender: Gender
    weight: Decimal | None = Field(default=None, ge=0, le=MAX_WEIGHT)
    medical_details: str | None = None
    medication_details: str | None = None
    personality: str | None = None
    service_type: str = Field(default=SERVICE_TYPE_UNSPECIFIED, max_length=50)
    photo_consent: bool = False

    @field_validator("photo_consent", mode="before")
    @classmethod
    def _coerce_photo_consent(cls, value: Any) -> Any:
        value = coerce_flag(value)
        return False if value is None else value

    @field_validator(
        "breed",
        "weight",
        "medical_details",
        "medication_details",
        "personality",
        mode="before",
    )
    @classmethod
    def _blank_optional_fields(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("weight")
    @classmethod
    def _round_weight(cls, value: Decimal | None) -> Decimal | None:
        if value is None:
            return None
        return value.quantize(WEIGHT_STEP, rounding=ROUND_HALF_UP)

    @field_validator("service_type", mode="before")
    @classmethod
    def _default_service_type(cls, value: Any) -> Any:
        value = blank_to_none(value)
        return SERVICE_TYPE_UNSPECIFIED if value is None else value

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()


class BookingPayload(_BookingFields):
    """Intake form body.

    Keys are accepted in snake_case (``owner_name``) or PascalCase
    (``OwnerName``). The health flags must be present and the terms accepted.
    """

    is_neutered: bool
    is_taking_medication: bool
    is_agreed: bool

    @field_validator("is_neutered", "is_taking_medication", "is_agreed", mode="before")
    @classmethod
    def _coerce_required_flags(cls, value: Any) -> Any:
        return coerce_flag(value)

    @field_validator("is_agreed")
    @classmethod
    def _require_agreement(cls, value: bool) -> bool:
        if not value:
            raise ValueError("terms must be accepted")
        return value


class BookingReplacePayload(_BookingFields):
    """Back-office full replace: every flag not sent as true is stored as false."""

    is_neutered: bool = False
    is_taking_medication: bool = False
    is_agreed: bool = False

    @field_validator("is_neutered", "is_taking_medication", "is_agreed", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Any:
        value = coerce_flag(value)
        return False if value is None else value


class BookingResponse(BaseModel):
    id: int
    owner_name: str
    phone_number: str
    pet_name: str
    breed: str | None
    gender: str
    is_neutered: bool
    weight: Decimal | None
    medical_details: str | None
    is_taking_medication: bool
    medication_details: str | None
    personality: str | None
    service_type: str
    photo_consent: bool
    is_agreed: bool
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class BookingActionResponse(BaseModel):
    success: bool = True
    message: str


class BookingCreatedResponse(BookingActionResponse):
    id: int
    booking: BookingResponse
