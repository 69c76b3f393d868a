"""Entidad Car - auto publicado por un partner."""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ApprovalStatus(str, Enum):
    """Revisión del auto por la plataforma."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RentalStatus(str, Enum):
    """Disponibilidad física del auto."""

    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"


class CarCategory(str, Enum):
    SEDAN = "SEDAN"
    SUV = "SUV"
    VAN = "VAN"
    PICKUP = "PICKUP"
    LUXURY = "LUXURY"
    COMPACT = "COMPACT"
    MOTORCYCLE = "MOTORCYCLE"


class Transmission(str, Enum):
    AUTO = "AUTO"
    MANUAL = "MANUAL"


class FuelType(str, Enum):
    PETROL = "PETROL"
    DIESEL = "DIESEL"
    HYBRID = "HYBRID"
    EV = "EV"


@dataclass
class Car:
    """Auto de un único partner."""

    id: str
    partner_id: str
    brand: str
    model: str
    price_per_day: Decimal
    year: int | None = None
    license_plate: str | None = None
    category: CarCategory = CarCategory.SEDAN
    transmission: Transmission = Transmission.AUTO
    fuel_type: FuelType = FuelType.PETROL
    seats: int | None = None
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    rental_status: RentalStatus = RentalStatus.AVAILABLE
    # Bloqueo de checkout: una sesión de navegador retiene el auto unos minutos
    locked_until: datetime | None = None
    locked_by_session: str | None = None
    created_at: datetime | None = None

    @property
    def is_bookable(self) -> bool:
        """
        Aprobado y disponible. La exclusión por reserva temporal vigente
        se aplica aparte (ver Booking.holds_car).
        """
        return (
            self.approval_status == ApprovalStatus.APPROVED
            and self.rental_status == RentalStatus.AVAILABLE
        )

    def is_locked_by_other(self, session_id: str, now: datetime) -> bool:
        return (
            self.locked_until is not None
            and self.locked_until > now
            and self.locked_by_session != session_id
        )

    def lock_remaining_minutes(self, now: datetime) -> int:
        """Minutos restantes del bloqueo, redondeados hacia arriba."""
        if self.locked_until is None or self.locked_until <= now:
            return 0
        return math.ceil((self.locked_until - now).total_seconds() / 60)
