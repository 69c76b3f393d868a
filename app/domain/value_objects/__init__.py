"""Value Objects del dominio de reservas."""

from app.domain.value_objects.api_key_secret import ApiKeySecret, hash_secret
from app.domain.value_objects.booking_number import BookingNumber
from app.domain.value_objects.money import Money
from app.domain.value_objects.rental_period import RentalPeriod

__all__ = [
    "ApiKeySecret",
    "BookingNumber",
    "Money",
    "RentalPeriod",
    "hash_secret",
]
