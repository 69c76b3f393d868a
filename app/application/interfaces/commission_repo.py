from decimal import Decimal
from typing import Sequence

from app.domain.entities.commission_log import CommissionLog, CommissionStatus


class CommissionRepo:
    async def get(self, commission_id: str) -> CommissionLog | None:
        raise NotImplementedError

    async def create(self, commission: CommissionLog) -> CommissionLog:
        raise NotImplementedError

    async def save_paid(self, commission: CommissionLog) -> CommissionLog:
        """
        Persiste la transición a PAID solo si el registro sigue PENDING.

        Raises:
            CommissionAlreadyPaidError: otra petición ya la marcó como pagada.
        """
        raise NotImplementedError

    async def list(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> Sequence[CommissionLog]:
        raise NotImplementedError

    async def summarize(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> tuple[Decimal, int]:
        """(suma de commission_amount, cantidad) para el mismo filtro que `list`."""
        raise NotImplementedError
