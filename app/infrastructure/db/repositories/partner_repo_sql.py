from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.partner_repo import PartnerRepo
from app.domain.entities.partner import Partner, PartnerStatus
from app.infrastructure.db.tables import partners, utc


class PartnerRepoSQL(PartnerRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, partner_id: str) -> Partner | None:
        stmt = select(partners).where(partners.c.id == partner_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Partner(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            commission_rate=row["commission_rate"],
            status=PartnerStatus(row["status"]),
            created_at=utc(row["created_at"]),
        )

    async def add(self, partner: Partner) -> Partner:
        await self._session.execute(
            insert(partners).values(
                id=partner.id,
                name=partner.name,
                phone=partner.phone,
                commission_rate=partner.commission_rate,
                status=partner.status.value,
                created_at=partner.created_at,
            )
        )
        return partner
