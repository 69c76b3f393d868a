from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_use_cases
from app.api.schemas.cars import (
    CarEnvelope,
    CarListResponse,
    CarLockResponse,
    CarResponse,
    LockCarRequest,
)
from app.api.schemas.common import Pagination
from app.application.dtos.pagination import PageRequest
from app.application.interfaces.car_repo import CarSearch, CarSort
from app.config import Settings, get_settings
from app.domain.entities.car import CarCategory, FuelType, RentalStatus, Transmission

router = APIRouter()


@router.get("/cars", response_model=CarListResponse, status_code=status.HTTP_200_OK)
async def list_cars(
    category: CarCategory | None = None,
    transmission: Transmission | None = None,
    fuel_type: FuelType | None = Query(default=None, alias="fuelType"),
    min_price: Decimal | None = Query(default=None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", ge=0),
    search: str | None = None,
    sort: CarSort = CarSort.NEWEST,
    page: int | None = None,
    limit: int | None = None,
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> CarListResponse:
    """Autos aprobados y disponibles, sin los que tienen una reserva temporal vigente."""
    criteria = CarSearch(
        rental_status=RentalStatus.AVAILABLE,
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
async def get_car(car_id: str, use_cases=Depends(get_use_cases)) -> CarEnvelope:
    car = await use_cases["get_car"].execute(car_id)
    return CarEnvelope(car=CarResponse.model_validate(car))


@router.post("/cars/{car_id}/lock", response_model=CarLockResponse, status_code=status.HTTP_200_OK)
async def lock_car(
    car_id: str,
    payload: LockCarRequest,
    use_cases=Depends(get_use_cases),
) -> CarLockResponse:
    lock = await use_cases["lock_car"].execute(car_id=car_id, session_id=payload.session_id)
    return CarLockResponse(locked_until=lock.locked_until)


@router.delete("/cars/{car_id}/lock", status_code=status.HTTP_200_OK)
async def unlock_car(
    car_id: str,
    session_id: str = Query(alias="sessionId", min_length=1),
    use_cases=Depends(get_use_cases),
) -> dict:
    await use_cases["unlock_car"].execute(car_id=car_id, session_id=session_id)
    return {"unlocked": True}
