"""Implementación in-memory del repositorio de reservas."""

from copy import deepcopy
from dataclasses import replace
from datetime import datetime
from typing import Sequence
from uuid import uuid4

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.errors import OptimisticLockError
from app.domain.value_objects.rental_period import RentalPeriod


class InMemoryBookingRepo(BookingRepo):
    """Guarda copias: mutar una entidad devuelta no altera lo almacenado."""

    def __init__(self) -> None:
        self._bookings: dict[str, Booking] = {}

    async def get(self, booking_id: str) -> Booking | None:
        booking = self._bookings.get(booking_id)
        return deepcopy(booking) if booking else None

    async def create(self, booking: Booking) -> Booking:
        stored = replace(booking, id=booking.id or str(uuid4()), lock_version=0)
        if stored.id in self._bookings:
            raise ValueError("Booking id already exists")
        self._bookings[stored.id] = deepcopy(stored)
        return stored

    async def update(self, booking: Booking, expected_lock_version: int) -> Booking:
        current = self._bookings.get(booking.id)
        if current is None or current.lock_version != expected_lock_version:
            raise OptimisticLockError(booking.id, expected_lock_version)
        stored = replace(booking, lock_version=expected_lock_version + 1)
        self._bookings[stored.id] = deepcopy(stored)
        return stored

    async def find_active_hold(self, car_id: str, now: datetime) -> Booking | None:
        for booking in self._bookings.values():
            if booking.car_id == car_id and booking.holds_car(now):
                return deepcopy(booking)
        return None

    async def find_overlapping(self, car_id: str, period: RentalPeriod) -> Booking | None:
        for booking in self._bookings.values():
            if (
                booking.car_id == car_id
                and booking.blocks_calendar()
                and booking.period.overlaps_with(period)
            ):
                return deepcopy(booking)
        return None

    async def held_car_ids(self, now: datetime) -> set[str]:
        return {b.car_id for b in self._bookings.values() if b.holds_car(now)}

    async def list_by_partner(
        self,
        partner_id: str | None,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        matches = [
            b
            for b in self._bookings.values()
            if (partner_id is None or b.partner_id == partner_id)
            and (status is None or b.lead_status == status)
        ]
        matches.sort(key=lambda b: b.created_at, reverse=True)
        return deepcopy(matches[offset : offset + limit]), len(matches)

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        matches = [b for b in self._bookings.values() if b.user_id == user_id]
        matches.sort(key=lambda b: b.created_at, reverse=True)
        return deepcopy(matches)

    async def search_by_user(
        self,
        user_id: str,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        matches = [
            b
            for b in self._bookings.values()
            if b.user_id == user_id and (status is None or b.lead_status == status)
        ]
        matches.sort(key=lambda b: b.created_at, reverse=True)
        return deepcopy(matches[offset : offset + limit]), len(matches)

    def clear(self) -> None:
        """Limpia todos los datos (para testing)."""
        self._bookings.clear()
