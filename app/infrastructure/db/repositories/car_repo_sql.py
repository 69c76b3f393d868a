from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.car_repo import CarRepo, CarSearch, CarSort
from app.domain.entities.car import (
    ApprovalStatus,
    Car,
    CarCategory,
    FuelType,
    RentalStatus,
    Transmission,
)
from app.infrastructure.db.tables import cars, utc


def _to_entity(row: Any) -> Car:
    return Car(
        id=row["id"],
        partner_id=row["partner_id"],
        brand=row["brand"],
        model=row["model"],
        year=row["year"],
        license_plate=row["license_plate"],
        category=CarCategory(row["category"]),
        transmission=Transmission(row["transmission"]),
        fuel_type=FuelType(row["fuel_type"]),
        seats=row["seats"],
        price_per_day=row["price_per_day"],
        approval_status=ApprovalStatus(row["approval_status"]),
        rental_status=RentalStatus(row["rental_status"]),
        locked_until=utc(row["locked_until"]),
        locked_by_session=row["locked_by_session"],
        created_at=utc(row["created_at"]),
    )


class CarRepoSQL(CarRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, car_id: str) -> Car | None:
        result = await self._session.execute(select(cars).where(cars.c.id == car_id).limit(1))
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def add(self, car: Car) -> Car:
        await self._session.execute(
            insert(cars).values(
                id=car.id,
                partner_id=car.partner_id,
                brand=car.brand,
                model=car.model,
                year=car.year,
                license_plate=car.license_plate,
                category=car.category.value,
                transmission=car.transmission.value,
                fuel_type=car.fuel_type.value,
                seats=car.seats,
                price_per_day=car.price_per_day,
                approval_status=car.approval_status.value,
                rental_status=car.rental_status.value,
                locked_until=car.locked_until,
                locked_by_session=car.locked_by_session,
                created_at=car.created_at,
            )
        )
        return car

    async def search(self, criteria: CarSearch) -> tuple[Sequence[Car], int]:
        conditions = []
        if criteria.approval_status is not None:
            conditions.append(cars.c.approval_status == criteria.approval_status.value)
        if criteria.rental_status is not None:
            conditions.append(cars.c.rental_status == criteria.rental_status.value)
        if criteria.partner_id is not None:
            conditions.append(cars.c.partner_id == criteria.partner_id)
        if criteria.category is not None:
            conditions.append(cars.c.category == criteria.category.value)
        if criteria.transmission is not None:
            conditions.append(cars.c.transmission == criteria.transmission.value)
        if criteria.fuel_type is not None:
            conditions.append(cars.c.fuel_type == criteria.fuel_type.value)
        if criteria.min_price is not None:
            conditions.append(cars.c.price_per_day >= criteria.min_price)
        if criteria.max_price is not None:
            conditions.append(cars.c.price_per_day <= criteria.max_price)
        if criteria.search:
            pattern = f"%{criteria.search.lower()}%"
            conditions.append(
                or_(func.lower(cars.c.brand).like(pattern), func.lower(cars.c.model).like(pattern))
            )
        if criteria.exclude_ids:
            conditions.append(cars.c.id.not_in(criteria.exclude_ids))

        if criteria.sort == CarSort.PRICE_ASC:
            order_by = cars.c.price_per_day.asc()
        elif criteria.sort == CarSort.PRICE_DESC:
            order_by = cars.c.price_per_day.desc()
        else:
            order_by = cars.c.created_at.desc()

        total = await self._session.scalar(
            select(func.count()).select_from(cars).where(*conditions)
        )
        stmt = (
            select(cars)
            .where(*conditions)
            .order_by(order_by, cars.c.id)
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()], total or 0

    async def acquire_lock(self, car_id: str, session_id: str, now: datetime, until: datetime) -> bool:
        stmt = (
            update(cars)
            .where(
                cars.c.id == car_id,
                or_(
                    cars.c.locked_until.is_(None),
                    cars.c.locked_until <= now,
                    cars.c.locked_by_session == session_id,
                ),
            )
            .values(locked_until=until, locked_by_session=session_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def release_lock(self, car_id: str, session_id: str) -> None:
        await self._session.execute(
            update(cars)
            .where(cars.c.id == car_id, cars.c.locked_by_session == session_id)
            .values(locked_until=None, locked_by_session=None)
        )

    async def set_approval_status(self, car_id: str, status: ApprovalStatus) -> Car | None:
        result = await self._session.execute(
            update(cars).where(cars.c.id == car_id).values(approval_status=status.value)
        )
        if result.rowcount == 0:
            return None
        return await self.get(car_id)
