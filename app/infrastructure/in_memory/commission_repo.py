from copy import deepcopy
from dataclasses import replace
from decimal import Decimal
from typing import Sequence
from uuid import uuid4

from app.application.interfaces.commission_repo import CommissionRepo
from app.domain.entities.commission_log import CommissionLog, CommissionStatus
from app.domain.errors import CommissionAlreadyPaidError


class InMemoryCommissionRepo(CommissionRepo):
    def __init__(self) -> None:
        self._commissions: dict[str, CommissionLog] = {}

    async def get(self, commission_id: str) -> CommissionLog | None:
        commission = self._commissions.get(commission_id)
        return deepcopy(commission) if commission else None

    async def create(self, commission: CommissionLog) -> CommissionLog:
        stored = replace(commission, id=commission.id or str(uuid4()))
        self._commissions[stored.id] = deepcopy(stored)
        return stored

    async def save_paid(self, commission: CommissionLog) -> CommissionLog:
        current = self._commissions[commission.id]
        if current.status != CommissionStatus.PENDING:
            raise CommissionAlreadyPaidError(commission.id)
        stored = replace(current, status=CommissionStatus.PAID, paid_at=commission.paid_at)
        self._commissions[stored.id] = stored
        return deepcopy(stored)

    def _filter(self, status: CommissionStatus | None, partner_id: str | None) -> list[CommissionLog]:
        return [
            c
            for c in self._commissions.values()
            if (status is None or c.status == status)
            and (partner_id is None or c.partner_id == partner_id)
        ]

    async def list(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> Sequence[CommissionLog]:
        matches = self._filter(status, partner_id)
        matches.sort(key=lambda c: c.created_at, reverse=True)
        return deepcopy(matches)

    async def summarize(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> tuple[Decimal, int]:
        matches = self._filter(status, partner_id)
        total = sum((c.commission_amount for c in matches), Decimal("0.00"))
        return total, len(matches)

    def clear(self) -> None:
        self._commissions.clear()
