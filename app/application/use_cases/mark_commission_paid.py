import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.commission_repo import CommissionRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.commission_log import CommissionLog, CommissionStatus
from app.domain.errors import CommissionNotFoundError, ValidationError


class MarkCommissionPaidUseCase:
    """PENDING -> PAID, una sola vez. El segundo intento falla y `paid_at` no cambia."""

    def __init__(
        self,
        commission_repo: CommissionRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._commission_repo = commission_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, commission_id: str, status: str) -> CommissionLog:
        if status != CommissionStatus.PAID.value:
            raise ValidationError("Only PAID status is allowed", field="status")

        async with self._transaction_manager.start():
            commission = await self._commission_repo.get(commission_id)
            if not commission:
                raise CommissionNotFoundError(commission_id)
            saved = await self._commission_repo.save_paid(commission.paid(self._clock.now()))

        self._logger.info(
            "Commission marked as paid",
            extra={
                "commission_id": saved.id,
                "partner_id": saved.partner_id,
                "commission_amount": str(saved.commission_amount),
            },
        )
        return saved
