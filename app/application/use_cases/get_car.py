from app.application.interfaces.car_repo import CarRepo
from app.domain.entities.car import ApprovalStatus, Car
from app.domain.errors import CarNotFoundError


class GetCarUseCase:
    def __init__(self, car_repo: CarRepo):
        self._car_repo = car_repo

    async def execute(
        self,
        car_id: str,
        partner_id: str | None = None,
        approved_only: bool = False,
    ) -> Car:
        """
        Detalle de un auto.

        Con `partner_id` o `approved_only`, un auto fuera de ese alcance se
        reporta igual que uno inexistente (404).
        """
        car = await self._car_repo.get(car_id)
        if not car:
            raise CarNotFoundError(car_id)
        if partner_id is not None and car.partner_id != partner_id:
            raise CarNotFoundError(car_id)
        if approved_only and car.approval_status != ApprovalStatus.APPROVED:
            raise CarNotFoundError(car_id)
        return car
