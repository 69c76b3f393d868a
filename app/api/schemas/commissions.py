from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, condecimal

from app.api.schemas.common import DECIMAL_ENCODERS, Money
from app.domain.entities.commission_log import CommissionStatus


class MarkCommissionRequest(BaseModel):
    # Plain str: any value other than "PAID" is rejected by the use case with 400.
    status: str


class CommissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=DECIMAL_ENCODERS)

    id: str
    partner_id: str
    booking_id: str
    booking_amount: Money
    commission_rate: condecimal(max_digits=5, decimal_places=2)
    commission_amount: Money
    status: CommissionStatus
    paid_at: datetime | None = None
    created_at: datetime | None = None


class CommissionEnvelope(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    commission: CommissionResponse


class CommissionSummary(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    total: Money = Decimal("0")
    count: int = 0


class CommissionListResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    commissions: list[CommissionResponse]
    summary: CommissionSummary
