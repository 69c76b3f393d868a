import logging

from app.application.interfaces.car_repo import CarRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.car import ApprovalStatus, Car
from app.domain.errors import CarNotFoundError, InvalidApprovalStatusError

REVIEW_OUTCOMES = (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)


class UpdateCarApprovalUseCase:
    """Revisión de un auto por la plataforma: solo APPROVED o REJECTED."""

    def __init__(self, car_repo: CarRepo, transaction_manager: TransactionManager):
        self._car_repo = car_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, car_id: str, status: str | None) -> Car:
        if status not in {s.value for s in REVIEW_OUTCOMES}:
            raise InvalidApprovalStatusError(str(status))

        async with self._transaction_manager.start():
            car = await self._car_repo.set_approval_status(car_id, ApprovalStatus(status))
            if not car:
                raise CarNotFoundError(car_id)

        self._logger.info(
            "Car approval updated",
            extra={"car_id": car.id, "partner_id": car.partner_id, "approval_status": car.approval_status.value},
        )
        return car
