import logging
from datetime import timedelta

from app.api.schemas.bookings import CreateBookingRequest
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.car_repo import CarRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.entities.user import User
from app.domain.errors import (
    AccountSuspendedError,
    BookingOverlapError,
    CarNotFoundError,
    CarOnHoldError,
    CarUnavailableError,
)
from app.domain.pricing import compute_total
from app.domain.value_objects.booking_number import BookingNumber
from app.domain.value_objects.rental_period import RentalPeriod


class CreateBookingUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        car_repo: CarRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        hold_minutes: int = 15,
    ) -> None:
        self._booking_repo = booking_repo
        self._car_repo = car_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._hold = timedelta(minutes=hold_minutes)
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateBookingRequest, caller: User | None = None) -> Booking:
        if caller is not None and caller.is_blacklisted:
            raise AccountSuspendedError()

        # Hold check, overlap check and insert share one transaction.
        async with self._transaction_manager.start():
            car = await self._car_repo.get(request.car_id)
            if not car:
                raise CarNotFoundError(request.car_id)
            if not car.is_bookable:
                raise CarUnavailableError(car.id)

            now = self._clock.now()
            if await self._booking_repo.find_active_hold(car.id, now):
                raise CarOnHoldError(car.id)

            period = RentalPeriod(start=request.pickup_datetime, end=request.return_datetime)
            if await self._booking_repo.find_overlapping(car.id, period):
                raise BookingOverlapError(car.id)

            booking = Booking(
                booking_number=BookingNumber.generate(now).value,
                car_id=car.id,
                partner_id=car.partner_id,
                user_id=caller.id if caller else None,
                customer_name=request.customer_name,
                customer_phone=request.customer_phone,
                customer_email=request.customer_email or "",
                customer_note=request.customer_note,
                pickup_datetime=period.start,
                return_datetime=period.end,
                pickup_location=request.pickup_location,
                return_location=request.return_location or request.pickup_location,
                total_price=compute_total(period.start, period.end, car.price_per_day),
                lead_status=LeadStatus.NEW,
                reserved_until=now + self._hold,
                created_at=now,
                updated_at=now,
            )
            saved = await self._booking_repo.create(booking)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": saved.id,
                "booking_number": saved.booking_number,
                "car_id": saved.car_id,
                "partner_id": saved.partner_id,
                "reserved_until": saved.reserved_until.isoformat(),
            },
        )
        return saved
