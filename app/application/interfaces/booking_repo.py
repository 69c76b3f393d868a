from datetime import datetime
from typing import Sequence

from app.domain.entities.booking import Booking, LeadStatus
from app.domain.value_objects.rental_period import RentalPeriod


class BookingRepo:
    async def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def create(self, booking: Booking) -> Booking:
        raise NotImplementedError

    async def update(self, booking: Booking, expected_lock_version: int) -> Booking:
        """
        Guarda `booking` solo si la versión almacenada es `expected_lock_version`.

        Raises:
            OptimisticLockError: otra petición modificó la reserva antes.
        """
        raise NotImplementedError

    async def find_active_hold(self, car_id: str, now: datetime) -> Booking | None:
        """Lead NEW con reserved_until > now sobre el auto, si existe."""
        raise NotImplementedError

    async def find_overlapping(self, car_id: str, period: RentalPeriod) -> Booking | None:
        """Lead no terminal del auto cuyas fechas se superponen con `period`."""
        raise NotImplementedError

    async def held_car_ids(self, now: datetime) -> set[str]:
        raise NotImplementedError

    async def list_by_partner(
        self,
        partner_id: str | None,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        """Leads más recientes primero; `partner_id` None lista todos."""
        raise NotImplementedError

    async def list_by_user(self, user_id: str) -> Sequence[Booking]:
        raise NotImplementedError

    async def search_by_user(
        self,
        user_id: str,
        status: LeadStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Booking], int]:
        """Reservas del usuario, más recientes primero, con total para paginar."""
        raise NotImplementedError
