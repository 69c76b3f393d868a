from copy import deepcopy
from dataclasses import replace
from datetime import datetime, timezone
from typing import Sequence

from app.application.interfaces.car_repo import CarRepo, CarSearch, CarSort
from app.domain.entities.car import ApprovalStatus, Car

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _matches(car: Car, criteria: CarSearch) -> bool:
    if criteria.approval_status is not None and car.approval_status != criteria.approval_status:
        return False
    if criteria.rental_status is not None and car.rental_status != criteria.rental_status:
        return False
    if criteria.partner_id is not None and car.partner_id != criteria.partner_id:
        return False
    if criteria.category is not None and car.category != criteria.category:
        return False
    if criteria.transmission is not None and car.transmission != criteria.transmission:
        return False
    if criteria.fuel_type is not None and car.fuel_type != criteria.fuel_type:
        return False
    if criteria.min_price is not None and car.price_per_day < criteria.min_price:
        return False
    if criteria.max_price is not None and car.price_per_day > criteria.max_price:
        return False
    if criteria.search:
        needle = criteria.search.lower()
        if needle not in car.brand.lower() and needle not in car.model.lower():
            return False
    return car.id not in criteria.exclude_ids


class InMemoryCarRepo(CarRepo):
    def __init__(self) -> None:
        self._cars: dict[str, Car] = {}

    async def get(self, car_id: str) -> Car | None:
        car = self._cars.get(car_id)
        return deepcopy(car) if car else None

    async def add(self, car: Car) -> Car:
        self._cars[car.id] = deepcopy(car)
        return car

    async def search(self, criteria: CarSearch) -> tuple[Sequence[Car], int]:
        matches = [car for car in self._cars.values() if _matches(car, criteria)]
        if criteria.sort == CarSort.PRICE_ASC:
            matches.sort(key=lambda c: (c.price_per_day, c.id))
        elif criteria.sort == CarSort.PRICE_DESC:
            matches.sort(key=lambda c: (-c.price_per_day, c.id))
        else:
            matches.sort(key=lambda c: (c.created_at or _EPOCH, c.id), reverse=True)
        page = matches[criteria.offset : criteria.offset + criteria.limit]
        return deepcopy(page), len(matches)

    async def acquire_lock(self, car_id: str, session_id: str, now: datetime, until: datetime) -> bool:
        car = self._cars.get(car_id)
        if car is None or car.is_locked_by_other(session_id, now):
            return False
        self._cars[car_id] = replace(car, locked_until=until, locked_by_session=session_id)
        return True

    async def release_lock(self, car_id: str, session_id: str) -> None:
        car = self._cars.get(car_id)
        if car is not None and car.locked_by_session == session_id:
            self._cars[car_id] = replace(car, locked_until=None, locked_by_session=None)

    async def set_approval_status(self, car_id: str, status: ApprovalStatus) -> Car | None:
        car = self._cars.get(car_id)
        if car is None:
            return None
        self._cars[car_id] = replace(car, approval_status=status)
        return deepcopy(self._cars[car_id])

    def clear(self) -> None:
        self._cars.clear()
