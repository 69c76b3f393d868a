from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_caller, get_use_cases
from app.api.schemas.bookings import (
    BookingEnvelope,
    BookingResponse,
    EditBookingRequest,
    LeadListResponse,
    UpdateLeadStatusRequest,
)
from app.api.schemas.common import Pagination
from app.application.dtos.pagination import PageRequest
from app.config import Settings, get_settings
from app.domain.entities.booking import LeadStatus
from app.domain.entities.user import User

router = APIRouter()


@router.get("/partner/leads", response_model=LeadListResponse, status_code=status.HTTP_200_OK)
async def list_leads(
    partner_id: str | None = Query(default=None, alias="partnerId"),
    lead_status: LeadStatus | None = Query(default=None, alias="status"),
    page: int | None = None,
    limit: int | None = None,
    caller: User | None = Depends(get_caller),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> LeadListResponse:
    page_request = PageRequest.clamp(page, limit, settings.default_page_size, settings.max_page_size)
    result = await use_cases["list_partner_leads"].execute(
        caller=caller,
        partner_id=partner_id,
        status=lead_status,
        page=page_request,
    )
    return LeadListResponse(
        leads=[BookingResponse.model_validate(b) for b in result.items],
        pagination=Pagination.from_page(result),
    )


@router.patch(
    "/partner/leads/{booking_id}/edit",
    response_model=BookingEnvelope,
    status_code=status.HTTP_200_OK,
)
async def edit_lead(
    booking_id: str,
    payload: EditBookingRequest,
    caller: User | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> BookingEnvelope:
    booking = await use_cases["edit_booking"].execute(
        caller=caller, booking_id=booking_id, request=payload
    )
    return BookingEnvelope(booking=BookingResponse.model_validate(booking))


@router.patch(
    "/partner/leads/{booking_id}/status",
    response_model=BookingEnvelope,
    status_code=status.HTTP_200_OK,
)
async def update_lead_status(
    booking_id: str,
    payload: UpdateLeadStatusRequest,
    caller: User | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> BookingEnvelope:
    booking = await use_cases["update_lead_status"].execute(
        caller=caller, booking_id=booking_id, request=payload
    )
    return BookingEnvelope(booking=BookingResponse.model_validate(booking))
