from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_caller, get_use_cases
from app.api.schemas.bookings import (
    BookingResponse,
    CreateBookingRequest,
    CreateBookingResponse,
    CustomerBookingsResponse,
)
from app.domain.entities.user import User

router = APIRouter()


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    caller: User | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> CreateBookingResponse:
    booking = await use_cases["create_booking"].execute(request=payload, caller=caller)
    return CreateBookingResponse(
        booking=BookingResponse.model_validate(booking),
        booking_number=booking.booking_number,
    )


@router.get(
    "/customer/bookings",
    response_model=CustomerBookingsResponse,
    status_code=status.HTTP_200_OK,
)
async def list_customer_bookings(
    user_id: str | None = Query(default=None, alias="userId"),
    caller: User | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> CustomerBookingsResponse:
    bookings = await use_cases["list_customer_bookings"].execute(caller=caller, user_id=user_id)
    return CustomerBookingsResponse(
        bookings=[BookingResponse.model_validate(b) for b in bookings],
    )
