import logging

from app.api.schemas.bookings import EditBookingRequest
from app.application.access_control import require_partner, verify_partner_ownership
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.car_repo import CarRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.booking import Booking
from app.domain.entities.user import User
from app.domain.errors import BookingNotFoundError, CarNotFoundError


class EditBookingUseCase:
    """
    Edición de un lead por su partner.

    Solo en NEW / CLAIMED; la devolución solo puede extenderse y el total se
    recalcula cuando cambia cualquiera de las dos fechas.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        car_repo: CarRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._car_repo = car_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        caller: User | None,
        booking_id: str,
        request: EditBookingRequest,
    ) -> Booking:
        require_partner(caller)
        changes = request.to_changes()

        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(booking_id)
            if not booking:
                raise BookingNotFoundError(booking_id)
            verify_partner_ownership(caller, booking.partner_id)

            car = await self._car_repo.get(booking.car_id)
            if not car:
                raise CarNotFoundError(booking.car_id)

            edited = booking.edited(changes, car.price_per_day, self._clock.now())
            saved = await self._booking_repo.update(
                edited, expected_lock_version=booking.lock_version
            )

        self._logger.info(
            "Booking edited",
            extra={
                "booking_id": saved.id,
                "editor_id": caller.id,
                "dates_changed": changes.changes_dates,
                "total_price": str(saved.total_price),
            },
        )
        return saved
