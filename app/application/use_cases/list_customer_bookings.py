from app.application.access_control import require_role, verify_user_ownership
from app.application.dtos.pagination import Page, PageRequest
from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import Booking, LeadStatus
from app.domain.entities.user import User, UserRole


class ListCustomerBookingsUseCase:
    def __init__(self, booking_repo: BookingRepo):
        self._booking_repo = booking_repo

    async def execute(self, caller: User | None, user_id: str | None = None) -> list[Booking]:
        user = require_role(caller, tuple(UserRole))
        target = user_id or user.id
        verify_user_ownership(user, target)
        return list(await self._booking_repo.list_by_user(target))

    async def execute_paged(
        self,
        caller: User | None,
        status: LeadStatus | None,
        page: PageRequest,
    ) -> Page[Booking]:
        """Solo las reservas propias del llamador, filtrables por estado."""
        user = require_role(caller, tuple(UserRole))
        bookings, total = await self._booking_repo.search_by_user(
            user.id, status=status, offset=page.offset, limit=page.limit
        )
        return Page(items=list(bookings), total=total, page=page.page, limit=page.limit)
