from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Sequence

from app.domain.entities.car import (
    ApprovalStatus,
    Car,
    CarCategory,
    FuelType,
    RentalStatus,
    Transmission,
)


class CarSort(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


@dataclass
class CarSearch:
    approval_status: ApprovalStatus | None = ApprovalStatus.APPROVED
    rental_status: RentalStatus | None = None
    partner_id: str | None = None
    category: CarCategory | None = None
    transmission: Transmission | None = None
    fuel_type: FuelType | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    search: str | None = None
    exclude_ids: set[str] = field(default_factory=set)
    sort: CarSort = CarSort.NEWEST
    offset: int = 0
    limit: int = 20


class CarRepo:
    async def get(self, car_id: str) -> Car | None:
        raise NotImplementedError

    async def add(self, car: Car) -> Car:
        raise NotImplementedError

    async def search(self, criteria: CarSearch) -> tuple[Sequence[Car], int]:
        raise NotImplementedError

    async def acquire_lock(self, car_id: str, session_id: str, now: datetime, until: datetime) -> bool:
        """
        Toma el bloqueo de checkout si está libre, vencido o ya es de `session_id`.

        Devuelve False si otra sesión conserva un bloqueo vigente.
        """
        raise NotImplementedError

    async def release_lock(self, car_id: str, session_id: str) -> None:
        """Libera el bloqueo solo si lo tiene `session_id`."""
        raise NotImplementedError

    async def set_approval_status(self, car_id: str, status: ApprovalStatus) -> Car | None:
        raise NotImplementedError
