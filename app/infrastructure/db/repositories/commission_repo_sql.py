from decimal import Decimal
from typing import Any, Sequence
from uuid import uuid4

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.commission_repo import CommissionRepo
from app.domain.entities.commission_log import CommissionLog, CommissionStatus
from app.domain.errors import CommissionAlreadyPaidError
from app.infrastructure.db.tables import commission_logs, utc


def _to_entity(row: Any) -> CommissionLog:
    return CommissionLog(
        id=row["id"],
        partner_id=row["partner_id"],
        booking_id=row["booking_id"],
        booking_amount=row["booking_amount"],
        commission_rate=row["commission_rate"],
        commission_amount=row["commission_amount"],
        status=CommissionStatus(row["status"]),
        paid_at=utc(row["paid_at"]),
        created_at=utc(row["created_at"]),
    )


def _filters(status: CommissionStatus | None, partner_id: str | None) -> list:
    conditions = []
    if status is not None:
        conditions.append(commission_logs.c.status == status.value)
    if partner_id is not None:
        conditions.append(commission_logs.c.partner_id == partner_id)
    return conditions


class CommissionRepoSQL(CommissionRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, commission_id: str) -> CommissionLog | None:
        stmt = select(commission_logs).where(commission_logs.c.id == commission_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def create(self, commission: CommissionLog) -> CommissionLog:
        commission_id = commission.id or str(uuid4())
        await self._session.execute(
            insert(commission_logs).values(
                id=commission_id,
                partner_id=commission.partner_id,
                booking_id=commission.booking_id,
                booking_amount=commission.booking_amount,
                commission_rate=commission.commission_rate,
                commission_amount=commission.commission_amount,
                status=commission.status.value,
                paid_at=commission.paid_at,
                created_at=commission.created_at,
            )
        )
        return await self.get(commission_id)

    async def save_paid(self, commission: CommissionLog) -> CommissionLog:
        stmt = (
            update(commission_logs)
            .where(
                commission_logs.c.id == commission.id,
                commission_logs.c.status == CommissionStatus.PENDING.value,
            )
            .values(status=CommissionStatus.PAID.value, paid_at=commission.paid_at)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise CommissionAlreadyPaidError(commission.id)
        return await self.get(commission.id)

    async def list(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> Sequence[CommissionLog]:
        stmt = (
            select(commission_logs)
            .where(*_filters(status, partner_id))
            .order_by(commission_logs.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def summarize(
        self,
        status: CommissionStatus | None = None,
        partner_id: str | None = None,
    ) -> tuple[Decimal, int]:
        stmt = select(
            func.coalesce(func.sum(commission_logs.c.commission_amount), 0),
            func.count(commission_logs.c.id),
        ).where(*_filters(status, partner_id))
        total, count = (await self._session.execute(stmt)).one()
        return Decimal(str(total)).quantize(Decimal("0.01")), count
