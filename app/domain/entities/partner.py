"""Entidad Partner - rentadora que publica autos y recibe leads."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class PartnerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


@dataclass
class Partner:
    id: str
    name: str
    phone: str | None = None
    # Porcentaje (ej: Decimal("10.00") = 10%)
    commission_rate: Decimal = Decimal("10.00")
    status: PartnerStatus = PartnerStatus.ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == PartnerStatus.ACTIVE
