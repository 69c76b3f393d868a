from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, constr, field_validator

from app.api.schemas.common import DECIMAL_ENCODERS, Money, Pagination, as_utc
from app.domain.entities.booking import BookingChanges, LeadStatus


# "" significa sin email; en una edición borra el email guardado.
OptionalEmail = EmailStr | Literal[""] | None


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    car_id: constr(strip_whitespace=True, min_length=1)
    customer_name: constr(strip_whitespace=True, min_length=1, max_length=255)
    customer_phone: constr(strip_whitespace=True, min_length=1, max_length=50)
    customer_email: OptionalEmail = None
    customer_note: str | None = None
    pickup_datetime: datetime
    return_datetime: datetime
    pickup_location: str = ""
    return_location: str | None = None

    @field_validator("pickup_datetime", "return_datetime")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("return_datetime")
    @classmethod
    def validate_dates(cls, value: datetime, info: Any) -> datetime:
        pickup = info.data.get("pickup_datetime")
        if pickup and value < pickup:
            raise ValueError("return_datetime must not be before pickup_datetime")
        return value


class EditBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    customer_name: constr(strip_whitespace=True, max_length=255) | None = None
    customer_phone: constr(strip_whitespace=True, max_length=50) | None = None
    customer_email: OptionalEmail = None
    customer_note: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    pickup_datetime: datetime | None = None
    return_datetime: datetime | None = None

    @field_validator("pickup_datetime", "return_datetime")
    @classmethod
    def normalize_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    def to_changes(self) -> BookingChanges:
        return BookingChanges(**self.model_dump())


class UpdateLeadStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: LeadStatus
    note: str | None = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=DECIMAL_ENCODERS)

    id: str
    booking_number: str
    car_id: str
    partner_id: str
    user_id: str | None = None
    customer_name: str
    customer_phone: str
    customer_email: str
    customer_note: str | None = None
    pickup_datetime: datetime
    return_datetime: datetime
    pickup_location: str
    return_location: str
    total_price: Money
    lead_status: LeadStatus
    reserved_until: datetime | None = None
    claimed_at: datetime | None = None
    pickup_confirmed_at: datetime | None = None
    return_confirmed_at: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BookingEnvelope(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    booking: BookingResponse


class CreateBookingResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    booking: BookingResponse
    booking_number: str


class LeadListResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    leads: list[BookingResponse]
    pagination: Pagination


class CustomerBookingsResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    bookings: list[BookingResponse]


class BookingListResponse(BaseModel):
    model_config = ConfigDict(json_encoders=DECIMAL_ENCODERS)

    bookings: list[BookingResponse]
    pagination: Pagination
