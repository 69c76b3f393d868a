"""
Bloqueo de checkout.

Mientras un cliente completa el formulario de reserva, su sesión de
navegador retiene el auto unos minutos para que otra sesión no lo tome.
El bloqueo vence solo; no hay tarea de limpieza.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.application.interfaces.car_repo import CarRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.errors import CarLockedError, CarNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarLock:
    car_id: str
    session_id: str
    locked_until: datetime


class LockCarUseCase:
    def __init__(
        self,
        car_repo: CarRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        lock_minutes: int = 5,
    ) -> None:
        self._car_repo = car_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._duration = timedelta(minutes=lock_minutes)

    async def execute(self, car_id: str, session_id: str) -> CarLock:
        """
        Toma o renueva el bloqueo para `session_id`.

        Raises:
            CarNotFoundError: el auto no existe (404).
            CarLockedError: otra sesión tiene un bloqueo vigente (409).
        """
        now = self._clock.now()
        until = now + self._duration
        async with self._transaction_manager.start():
            car = await self._car_repo.get(car_id)
            if not car:
                raise CarNotFoundError(car_id)
            acquired = await self._car_repo.acquire_lock(car_id, session_id, now, until)

        if not acquired:
            # Releer: el bloqueo pudo cambiar de dueño entre la lectura y el UPDATE.
            current = await self._car_repo.get(car_id) or car
            raise CarLockedError(car_id, max(current.lock_remaining_minutes(now), 1))

        logger.info("Car locked for checkout", extra={"car_id": car_id, "locked_until": until.isoformat()})
        return CarLock(car_id=car_id, session_id=session_id, locked_until=until)


class UnlockCarUseCase:
    def __init__(self, car_repo: CarRepo, transaction_manager: TransactionManager):
        self._car_repo = car_repo
        self._transaction_manager = transaction_manager

    async def execute(self, car_id: str, session_id: str) -> None:
        """Un bloqueo ajeno o ya vencido se deja como está; la respuesta es la misma."""
        async with self._transaction_manager.start():
            if not await self._car_repo.get(car_id):
                raise CarNotFoundError(car_id)
            await self._car_repo.release_lock(car_id, session_id)
