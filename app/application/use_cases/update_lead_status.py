import logging

from app.api.schemas.bookings import UpdateLeadStatusRequest
from app.application.access_control import require_partner, verify_partner_ownership
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.commission_repo import CommissionRepo
from app.application.interfaces.partner_repo import PartnerRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.entities.commission_log import CommissionLog
from app.domain.entities.user import User
from app.domain.errors import BookingNotFoundError, NotFoundError


class UpdateLeadStatusUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        partner_repo: PartnerRepo,
        commission_repo: CommissionRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._partner_repo = partner_repo
        self._commission_repo = commission_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        caller: User | None,
        booking_id: str,
        request: UpdateLeadStatusRequest,
    ) -> Booking:
        require_partner(caller)

        async with self._transaction_manager.start():
            booking = await self._booking_repo.get(booking_id)
            if not booking:
                raise BookingNotFoundError(booking_id)
            verify_partner_ownership(caller, booking.partner_id)

            now = self._clock.now()
            advanced = booking.advanced_to(request.status, caller.id, now, note=request.note)
            saved = await self._booking_repo.update(
                advanced, expected_lock_version=booking.lock_version
            )

            commission = None
            if saved.lead_status == LeadStatus.COMPLETED:
                partner = await self._partner_repo.get(saved.partner_id)
                if not partner:
                    raise NotFoundError("Partner not found", code="PARTNER_NOT_FOUND")
                commission = await self._commission_repo.create(
                    CommissionLog.for_completed_booking(
                        booking_id=saved.id,
                        partner_id=saved.partner_id,
                        booking_amount=saved.total_price,
                        commission_rate=partner.commission_rate,
                        at=now,
                    )
                )

        self._logger.info(
            "Lead status changed",
            extra={
                "booking_id": saved.id,
                "from_status": booking.lead_status.value,
                "to_status": saved.lead_status.value,
                "actor_id": caller.id,
            },
        )
        if commission:
            self._logger.info(
                "Commission created",
                extra={
                    "commission_id": commission.id,
                    "booking_id": saved.id,
                    "commission_amount": str(commission.commission_amount),
                },
            )
        return saved
