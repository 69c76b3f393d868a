from datetime import datetime

from pydantic import BaseModel, ConfigDict, constr

from app.api.schemas.common import DECIMAL_ENCODERS, Money, Pagination
from app.domain.entities.car import (
    ApprovalStatus,
    CarCategory,
    FuelType,
    RentalStatus,
    Transmission,
)


class CarResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=DECIMAL_ENCODERS)

    id: str
    partner_id: str
    brand: str
    model: str
    year: int | None = None
    license_plate: str | None = None
    category: CarCategory
    transmission: Transmission
    fuel_type: FuelType
    seats: int | None = None
    price_per_day: Money
    approval_status: ApprovalStatus
    rental_status: RentalStatus
    locked_until: datetime | None = None
    created_at: datetime | None = None


class CarListResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    cars: list[CarResponse]
    pagination: Pagination


class CarEnvelope(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    car: CarResponse


class LockCarRequest(BaseModel):
    session_id: constr(strip_whitespace=True, min_length=1, max_length=64)


class CarLockResponse(BaseModel):
    locked: bool = True
    locked_by_other: bool = False
    locked_until: datetime
    message: str = "Lock acquired successfully"


class UpdateCarApprovalRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # APPROVED o REJECTED; el caso de uso rechaza cualquier otro valor.
    status: str | None = None
