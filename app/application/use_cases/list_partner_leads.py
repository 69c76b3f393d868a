from app.application.access_control import require_partner, verify_partner_ownership
from app.application.dtos.pagination import Page, PageRequest
from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.entities.user import User, UserRole


class ListPartnerLeadsUseCase:
    def __init__(self, booking_repo: BookingRepo):
        self._booking_repo = booking_repo

    async def execute(
        self,
        caller: User | None,
        partner_id: str | None,
        status: LeadStatus | None,
        page: PageRequest,
    ) -> Page[Booking]:
        """
        PARTNER_ADMIN sin `partner_id` ve los leads de su propio partner;
        PLATFORM_OWNER sin `partner_id` ve todos.
        """
        user = require_partner(caller)
        if user.role == UserRole.PARTNER_ADMIN:
            partner_id = partner_id or user.partner_id
            verify_partner_ownership(user, partner_id)
        return await self.execute_for_partner(partner_id, status, page)

    async def execute_for_partner(
        self,
        partner_id: str | None,
        status: LeadStatus | None,
        page: PageRequest,
    ) -> Page[Booking]:
        """Sin chequeo de usuario: el llamador ya fue autorizado (p. ej. por API key)."""
        leads, total = await self._booking_repo.list_by_partner(
            partner_id, status=status, offset=page.offset, limit=page.limit
        )
        return Page(items=list(leads), total=total, page=page.page, limit=page.limit)
