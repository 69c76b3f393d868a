from app.application.dtos.pagination import Page, PageRequest
from app.application.interfaces.car_repo import CarRepo, CarSearch
from app.domain.entities.car import ApprovalStatus, Car, RentalStatus


class ListPartnerCarsUseCase:
    """Flota completa de un partner, en cualquier estado de revisión salvo que se filtre."""

    def __init__(self, car_repo: CarRepo):
        self._car_repo = car_repo

    async def execute(
        self,
        partner_id: str,
        rental_status: RentalStatus | None,
        approval_status: ApprovalStatus | None,
        page: PageRequest,
    ) -> Page[Car]:
        criteria = CarSearch(
            approval_status=approval_status,
            rental_status=rental_status,
            partner_id=partner_id,
            offset=page.offset,
            limit=page.limit,
        )
        cars, total = await self._car_repo.search(criteria)
        return Page(items=list(cars), total=total, page=page.page, limit=page.limit)
