from app.domain.entities.partner import Partner


class PartnerRepo:
    async def get(self, partner_id: str) -> Partner | None:
        raise NotImplementedError

    async def add(self, partner: Partner) -> Partner:
        raise NotImplementedError
