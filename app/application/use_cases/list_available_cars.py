from dataclasses import replace

from app.application.dtos.pagination import Page, PageRequest
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.car_repo import CarRepo, CarSearch
from app.application.interfaces.clock import Clock
from app.domain.entities.car import ApprovalStatus, Car


class ListAvailableCarsUseCase:
    """
    Listado de autos aprobados excluyendo los que tienen una reserva
    temporal vigente (lead NEW con reserved_until en el futuro).

    El vencimiento es perezoso: se evalúa contra `clock.now()` en cada lectura.
    """

    def __init__(self, car_repo: CarRepo, booking_repo: BookingRepo, clock: Clock):
        self._car_repo = car_repo
        self._booking_repo = booking_repo
        self._clock = clock

    async def execute(self, criteria: CarSearch, page: PageRequest) -> Page[Car]:
        held = await self._booking_repo.held_car_ids(self._clock.now())
        search = replace(
            criteria,
            approval_status=ApprovalStatus.APPROVED,
            exclude_ids=set(criteria.exclude_ids) | held,
            offset=page.offset,
            limit=page.limit,
        )
        cars, total = await self._car_repo.search(search)
        return Page(items=list(cars), total=total, page=page.page, limit=page.limit)
