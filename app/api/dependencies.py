from collections.abc import Callable
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.access_control import ANY_ROLE, require_admin, require_role
from app.application.interfaces.clock import Clock, SystemClock
from app.application.use_cases.authenticate_api_key import ApiKeyContext, AuthenticateApiKeyUseCase
from app.application.use_cases.car_lock import LockCarUseCase, UnlockCarUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.edit_booking import EditBookingUseCase
from app.application.use_cases.get_car import GetCarUseCase
from app.application.use_cases.get_profile import GetProfileUseCase
from app.application.use_cases.issue_api_key import IssueApiKeyUseCase
from app.application.use_cases.list_available_cars import ListAvailableCarsUseCase
from app.application.use_cases.list_commissions import ListCommissionsUseCase
from app.application.use_cases.list_customer_bookings import ListCustomerBookingsUseCase
from app.application.use_cases.list_partner_cars import ListPartnerCarsUseCase
from app.application.use_cases.list_partner_leads import ListPartnerLeadsUseCase
from app.application.use_cases.manage_api_keys import (
    DeleteApiKeyUseCase,
    ListApiKeysUseCase,
    UpdateApiKeyUseCase,
)
from app.application.use_cases.mark_commission_paid import MarkCommissionPaidUseCase
from app.application.use_cases.resolve_caller import ResolveCallerUseCase
from app.application.use_cases.update_lead_status import UpdateLeadStatusUseCase
from app.application.use_cases.update_car_approval import UpdateCarApprovalUseCase
from app.config import Settings, get_settings
from app.domain.entities.api_key import ApiKeyPermission
from app.domain.entities.user import User
from app.infrastructure.db.repositories.api_key_repo_sql import ApiKeyRepoSQL
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.repositories.car_repo_sql import CarRepoSQL
from app.infrastructure.db.repositories.commission_repo_sql import CommissionRepoSQL
from app.infrastructure.db.repositories.partner_repo_sql import PartnerRepoSQL
from app.infrastructure.db.repositories.user_repo_sql import UserRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory import (
    InMemoryApiKeyRepo,
    InMemoryBookingRepo,
    InMemoryCarRepo,
    InMemoryCommissionRepo,
    InMemoryPartnerRepo,
    InMemoryTransactionManager,
    InMemoryUserRepo,
)

_bearer = HTTPBearer(auto_error=False)


async def get_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[AsyncSession | None, None]:
    if settings.use_in_memory:
        yield None
        return
    session_maker = getattr(request.app.state, "session_maker", None)
    if session_maker is None:
        raise RuntimeError("DB session not available")
    async with session_maker() as session:
        yield session


def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def get_in_memory_bundle() -> dict:
    return {
        "partner_repo": InMemoryPartnerRepo(),
        "user_repo": InMemoryUserRepo(),
        "car_repo": InMemoryCarRepo(),
        "booking_repo": InMemoryBookingRepo(),
        "commission_repo": InMemoryCommissionRepo(),
        "api_key_repo": InMemoryApiKeyRepo(),
        "tx_manager": InMemoryTransactionManager(),
    }


def _sql_bundle(session: AsyncSession) -> dict:
    return {
        "partner_repo": PartnerRepoSQL(session),
        "user_repo": UserRepoSQL(session),
        "car_repo": CarRepoSQL(session),
        "booking_repo": BookingRepoSQL(session),
        "commission_repo": CommissionRepoSQL(session),
        "api_key_repo": ApiKeyRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    if settings.use_in_memory:
        bundle = get_in_memory_bundle()
    else:
        if not session:
            raise RuntimeError("DB session not available")
        bundle = _sql_bundle(session)

    booking_repo = bundle["booking_repo"]
    car_repo = bundle["car_repo"]
    commission_repo = bundle["commission_repo"]
    api_key_repo = bundle["api_key_repo"]
    tx_manager = bundle["tx_manager"]

    return {
        "resolve_caller": ResolveCallerUseCase(user_repo=bundle["user_repo"], clock=clock),
        "get_profile": GetProfileUseCase(),
        "list_available_cars": ListAvailableCarsUseCase(
            car_repo=car_repo,
            booking_repo=booking_repo,
            clock=clock,
        ),
        "get_car": GetCarUseCase(car_repo=car_repo),
        "list_partner_cars": ListPartnerCarsUseCase(car_repo=car_repo),
        "lock_car": LockCarUseCase(
            car_repo=car_repo,
            transaction_manager=tx_manager,
            clock=clock,
            lock_minutes=settings.car_lock_minutes,
        ),
        "unlock_car": UnlockCarUseCase(car_repo=car_repo, transaction_manager=tx_manager),
        "update_car_approval": UpdateCarApprovalUseCase(car_repo=car_repo, transaction_manager=tx_manager),
        "create_booking": CreateBookingUseCase(
            booking_repo=booking_repo,
            car_repo=car_repo,
            transaction_manager=tx_manager,
            clock=clock,
            hold_minutes=settings.reservation_hold_minutes,
        ),
        "list_customer_bookings": ListCustomerBookingsUseCase(booking_repo=booking_repo),
        "list_partner_leads": ListPartnerLeadsUseCase(booking_repo=booking_repo),
        "edit_booking": EditBookingUseCase(
            booking_repo=booking_repo,
            car_repo=car_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "update_lead_status": UpdateLeadStatusUseCase(
            booking_repo=booking_repo,
            partner_repo=bundle["partner_repo"],
            commission_repo=commission_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "list_commissions": ListCommissionsUseCase(commission_repo=commission_repo),
        "mark_commission_paid": MarkCommissionPaidUseCase(
            commission_repo=commission_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "issue_api_key": IssueApiKeyUseCase(
            api_key_repo=api_key_repo,
            partner_repo=bundle["partner_repo"],
            clock=clock,
            key_prefix=settings.api_key_prefix,
        ),
        "list_api_keys": ListApiKeysUseCase(api_key_repo=api_key_repo),
        "update_api_key": UpdateApiKeyUseCase(api_key_repo=api_key_repo),
        "delete_api_key": DeleteApiKeyUseCase(api_key_repo=api_key_repo),
        "authenticate_api_key": AuthenticateApiKeyUseCase(
            api_key_repo=api_key_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
    }


async def get_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> User | None:
    """Usuario de la sesión (Bearer o cookie de sesión); None si es anónimo."""
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(settings.session_cookie_name)
    return await use_cases["resolve_caller"].execute(token)


async def get_authenticated_caller(caller: User | None = Depends(get_caller)) -> User:
    return require_role(caller, ANY_ROLE)


async def get_admin(caller: User | None = Depends(get_caller)) -> User:
    return require_admin(caller)


def require_api_key(*permissions: ApiKeyPermission) -> Callable:
    async def dependency(
        api_key: str | None = Header(default=None, alias="X-API-Key"),
        use_cases=Depends(get_use_cases),
    ) -> ApiKeyContext:
        authenticate: AuthenticateApiKeyUseCase = use_cases["authenticate_api_key"]
        return await authenticate.execute(api_key, permissions)

    return dependency
