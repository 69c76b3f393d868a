"""
API externa para integraciones con llave (header X-API-Key).

Las rutas de reservas y de perfil además identifican al usuario final con
su token de sesión (Authorization: Bearer).
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_authenticated_caller, get_caller, get_use_cases, require_api_key
from app.api.schemas.bookings import (
    BookingListResponse,
    BookingResponse,
    CreateBookingRequest,
    CreateBookingResponse,
    LeadListResponse,
)
from app.api.schemas.cars import CarEnvelope, CarListResponse, CarResponse
from app.api.schemas.common import Pagination
from app.api.schemas.users import UserEnvelope, UserResponse
from app.application.dtos.pagination import PageRequest
from app.application.interfaces.car_repo import CarSearch, CarSort
from app.application.use_cases.authenticate_api_key import ApiKeyContext
from app.config import Settings, get_settings
from app.domain.entities.api_key import ApiKeyPermission
from app.domain.entities.booking import LeadStatus
from app.domain.entities.car import ApprovalStatus, CarCategory, FuelType, RentalStatus, Transmission
from app.domain.entities.user import User
from app.domain.errors import ApiKeyNotLinkedError

router = APIRouter(prefix="/v1")

require_read = require_api_key(ApiKeyPermission.READ)
require_write = require_api_key(ApiKeyPermission.WRITE)

PARTNER_CARS_PAGE_SIZE = 50


@router.get("/cars", response_model=CarListResponse, status_code=status.HTTP_200_OK)
async def list_cars(
    rental_status: RentalStatus = Query(default=RentalStatus.AVAILABLE, alias="rentalStatus"),
    category: CarCategory | None = None,
    transmission: Transmission | None = None,
    fuel_type: FuelType | None = Query(default=None, alias="fuelType"),
    min_price: Decimal | None = Query(default=None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", ge=0),
    search: str | None = None,
    sort: CarSort = CarSort.NEWEST,
    page: int | None = None,
    limit: int | None = None,
    context: ApiKeyContext = Depends(require_read),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> CarListResponse:
    """Una llave ligada a un partner solo ve los autos de ese partner."""
    criteria = CarSearch(
        rental_status=rental_status,
        partner_id=context.partner_id,
        category=category,
        transmission=transmission,
        fuel_type=fuel_type,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
    )
    page_request = PageRequest.clamp(page, limit, settings.default_page_size, settings.max_page_size)
    result = await use_cases["list_available_cars"].execute(criteria, page_request)
    return CarListResponse(
        cars=[CarResponse.model_validate(car) for car in result.items],
        pagination=Pagination.from_page(result),
    )


@router.get("/cars/{car_id}", response_model=CarEnvelope, status_code=status.HTTP_200_OK)
async def get_car(
    car_id: str,
    context: ApiKeyContext = Depends(require_read),
    use_cases=Depends(get_use_cases),
) -> CarEnvelope:
    car = await use_cases["get_car"].execute(car_id, partner_id=context.partner_id, approved_only=True)
    return CarEnvelope(car=CarResponse.model_validate(car))


@router.get("/partner/cars", response_model=CarListResponse, status_code=status.HTTP_200_OK)
async def list_partner_cars(
    rental_status: RentalStatus | None = Query(default=None, alias="rentalStatus"),
    approval_status: ApprovalStatus | None = Query(default=None, alias="approvalStatus"),
    page: int | None = None,
    limit: int | None = None,
    context: ApiKeyContext = Depends(require_read),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> CarListResponse:
    if not context.partner_id:
        raise ApiKeyNotLinkedError()

    page_request = PageRequest.clamp(page, limit, PARTNER_CARS_PAGE_SIZE, settings.max_page_size)
    result = await use_cases["list_partner_cars"].execute(
        partner_id=context.partner_id,
        rental_status=rental_status,
        approval_status=approval_status,
        page=page_request,
    )
    return CarListResponse(
        cars=[CarResponse.model_validate(car) for car in result.items],
        pagination=Pagination.from_page(result),
    )


@router.get("/partner/leads", response_model=LeadListResponse, status_code=status.HTTP_200_OK)
async def list_partner_leads(
    lead_status: LeadStatus | None = Query(default=None, alias="status"),
    page: int | None = None,
    limit: int | None = None,
    context: ApiKeyContext = Depends(require_read),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> LeadListResponse:
    if not context.partner_id:
        raise ApiKeyNotLinkedError()

    page_request = PageRequest.clamp(page, limit, settings.default_page_size, settings.max_page_size)
    result = await use_cases["list_partner_leads"].execute_for_partner(
        partner_id=context.partner_id,
        status=lead_status,
        page=page_request,
    )
    return LeadListResponse(
        leads=[BookingResponse.model_validate(b) for b in result.items],
        pagination=Pagination.from_page(result),
    )


@router.get("/bookings", response_model=BookingListResponse, status_code=status.HTTP_200_OK)
async def list_bookings(
    lead_status: LeadStatus | None = Query(default=None, alias="status"),
    page: int | None = None,
    limit: int | None = None,
    context: ApiKeyContext = Depends(require_read),
    caller: User | None = Depends(get_caller),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> BookingListResponse:
    page_request = PageRequest.clamp(page, limit, settings.default_page_size, settings.max_page_size)
    result = await use_cases["list_customer_bookings"].execute_paged(
        caller=caller,
        status=lead_status,
        page=page_request,
    )
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(b) for b in result.items],
        pagination=Pagination.from_page(result),
    )


@router.post("/bookings", response_model=CreateBookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: CreateBookingRequest,
    context: ApiKeyContext = Depends(require_write),
    caller: User = Depends(get_authenticated_caller),
    use_cases=Depends(get_use_cases),
) -> CreateBookingResponse:
    booking = await use_cases["create_booking"].execute(request=payload, caller=caller)
    return CreateBookingResponse(
        booking=BookingResponse.model_validate(booking),
        booking_number=booking.booking_number,
    )


@router.get("/auth/me", response_model=UserEnvelope, status_code=status.HTTP_200_OK)
async def get_me(
    caller: User | None = Depends(get_caller),
    use_cases=Depends(get_use_cases),
) -> UserEnvelope:
    user = await use_cases["get_profile"].execute(caller)
    return UserEnvelope(user=UserResponse.model_validate(user))
