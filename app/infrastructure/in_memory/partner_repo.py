from copy import deepcopy

from app.application.interfaces.partner_repo import PartnerRepo
from app.domain.entities.partner import Partner


class InMemoryPartnerRepo(PartnerRepo):
    def __init__(self) -> None:
        self._partners: dict[str, Partner] = {}

    async def get(self, partner_id: str) -> Partner | None:
        partner = self._partners.get(partner_id)
        return deepcopy(partner) if partner else None

    async def add(self, partner: Partner) -> Partner:
        self._partners[partner.id] = deepcopy(partner)
        return partner

    def clear(self) -> None:
        self._partners.clear()
