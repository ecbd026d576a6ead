from grooming_booking.db.models.booking import SERVICE_TYPE_UNSPECIFIED, Booking

__all__ = [
    "Booking",
    "SERVICE_TYPE_UNSPECIFIED",
]
