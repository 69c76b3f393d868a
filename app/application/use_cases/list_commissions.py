from dataclasses import dataclass
from decimal import Decimal

from app.application.interfaces.commission_repo import CommissionRepo
from app.domain.entities.commission_log import CommissionLog, CommissionStatus


@dataclass
class CommissionReport:
    commissions: list[CommissionLog]
    total: Decimal
    count: int


class ListCommissionsUseCase:
    def __init__(self, commission_repo: CommissionRepo):
        self._commission_repo = commission_repo

    async def execute(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> CommissionReport:
        commissions = await self._commission_repo.list(status=status, partner_id=partner_id)
        total, count = await self._commission_repo.summarize(status=status, partner_id=partner_id)
        return CommissionReport(commissions=list(commissions), total=total, count=count)
