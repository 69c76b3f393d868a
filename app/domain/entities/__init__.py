"""Entidades del dominio de reservas de autos."""

from app.domain.entities.api_key import ApiKey, ApiKeyPermission
from app.domain.entities.booking import (
    EDITABLE_STATUSES,
    Booking,
    BookingChanges,
    LeadStatus,
)
from app.domain.entities.car import (
    ApprovalStatus,
    Car,
    CarCategory,
    FuelType,
    RentalStatus,
    Transmission,
)
from app.domain.entities.commission_log import CommissionLog, CommissionStatus
from app.domain.entities.partner import Partner, PartnerStatus
from app.domain.entities.user import User, UserRole

__all__ = [
    # Booking
    "Booking",
    "BookingChanges",
    "LeadStatus",
    "EDITABLE_STATUSES",
    # Car
    "Car",
    "ApprovalStatus",
    "RentalStatus",
    "CarCategory",
    "Transmission",
    "FuelType",
    # Partner
    "Partner",
    "PartnerStatus",
    # Commission
    "CommissionLog",
    "CommissionStatus",
    # ApiKey
    "ApiKey",
    "ApiKeyPermission",
    # User
    "User",
    "UserRole",
]
