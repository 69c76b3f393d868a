from datetime import datetime
from typing import Any, Sequence
from uuid import uuid4

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.errors import OptimisticLockError
from app.domain.value_objects.rental_period import RentalPeriod
from app.infrastructure.db.tables import bookings, utc

TERMINAL_STATUSES = [s.value for s in LeadStatus if s.is_terminal]

_DATETIME_FIELDS = (
    "pickup_datetime",
    "return_datetime",
    "reserved_until",
    "claimed_at",
    "pickup_confirmed_at",
    "return_confirmed_at",
    "created_at",
    "updated_at",
)


def _to_entity(row: Any) -> Booking:
    values = dict(row)
    for name in _DATETIME_FIELDS:
        values[name] = utc(values[name])
    values["lead_status"] = LeadStatus(values["lead_status"])
    return Booking(**values)


def _to_row(booking: Booking) -> dict:
    return {
        "booking_number": booking.booking_number,
        "car_id": booking.car_id,
        "partner_id": booking.partner_id,
        "user_id": booking.user_id,
        "customer_name": booking.customer_name,
        "customer_phone": booking.customer_phone,
        "customer_email": booking.customer_email,
        "customer_note": booking.customer_note,
        "pickup_datetime": booking.pickup_datetime,
        "return_datetime": booking.return_datetime,
        "pickup_location": booking.pickup_location,
        "return_location": booking.return_location,
        "total_price": booking.total_price,
        "lead_status": booking.lead_status.value,
        "reserved_until": booking.reserved_until,
        "claimed_by_id": booking.claimed_by_id,
        "claimed_at": booking.claimed_at,
        "pickup_confirmed_by_id": booking.pickup_confirmed_by_id,
        "pickup_confirmed_at": booking.pickup_confirmed_at,
        "return_confirmed_by_id": booking.return_confirmed_by_id,
        "return_confirmed_at": booking.return_confirmed_at,
        "cancellation_reason": booking.cancellation_reason,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
    }


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, booking_id: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def create(self, booking: Booking) -> Booking:
        booking_id = booking.id or str(uuid4())
        values = _to_row(booking)
        values.update(id=booking_id, lock_version=0)
        await self._session.execute(insert(bookings).values(values))
        return await self.get(booking_id)

    async def update(self, booking: Booking, expected_lock_version: int) -> Booking:
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking.id,
                bookings.c.lock_version == expected_lock_version,
            )
            .values(**_to_row(booking), lock_version=expected_lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError(booking.id, expected_lock_version)
        return await self.get(booking.id)

    async def find_active_hold(self, car_id: str, now: datetime) -> Booking | None:
        stmt = (
            select(bookings)
            .where(
                bookings.c.car_id == car_id,
                bookings.c.lead_status == LeadStatus.NEW.value,
                bookings.c.reserved_until > now,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def find_overlapping(self, car_id: str, period: RentalPeriod) -> Booking | None:
        stmt = (
            select(bookings)
            .where(
                bookings.c.car_id == car_id,
                bookings.c.lead_status.not_in(TERMINAL_STATUSES),
                bookings.c.pickup_datetime < period.end,
                bookings.c.return_datetime > period.start,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def held_car_ids(self, now: datetime) -> set[str]:
        stmt = select(bookings.c.car_id).where(
            bookings.c.lead_status == LeadStatus.NEW.value,
            bookings.c.reserved_until > now,
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def list_by_partner(
        self,
        partner_id: str | None,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        conditions = []
        if partner_id is not None:
            conditions.append(bookings.c.partner_id == partner_id)
        if status is not None:
            conditions.append(bookings.c.lead_status == status.value)

        total = await self._session.scalar(
            select(func.count()).select_from(bookings).where(*conditions)
        )
        stmt = (
            select(bookings)
            .where(*conditions)
            .order_by(bookings.c.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()], total or 0

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.user_id == user_id)
            .order_by(bookings.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def search_by_user(
        self,
        user_id: str,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        conditions = [bookings.c.user_id == user_id]
        if status is not None:
            conditions.append(bookings.c.lead_status == status.value)

        total = await self._session.scalar(
            select(func.count()).select_from(bookings).where(*conditions)
        )
        stmt = (
            select(bookings)
            .where(*conditions)
            .order_by(bookings.c.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()], total or 0
