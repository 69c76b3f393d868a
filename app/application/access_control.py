"""
Guard de control de acceso por instancia.

Un chequeo de rol nunca basta para datos de un partner o de un cliente:
además debe coincidir la identidad concreta (partner_id / user_id).
Los errores son genéricos y no revelan si el recurso objetivo existe.
"""

from collections.abc import Iterable

from app.domain.entities.user import User, UserRole
from app.domain.errors import ForbiddenError, UnauthorizedError

PARTNER_ROLES = (UserRole.PARTNER_ADMIN, UserRole.PLATFORM_OWNER)
ADMIN_ROLES = (UserRole.PLATFORM_OWNER,)
ANY_ROLE = tuple(UserRole)


def require_role(caller: User | None, allowed_roles: Iterable[UserRole]) -> User:
    if caller is None:
        raise UnauthorizedError()
    if caller.role not in tuple(allowed_roles):
        raise ForbiddenError("Forbidden: Insufficient permissions")
    return caller


def require_admin(caller: User | None) -> User:
    return require_role(caller, ADMIN_ROLES)


def require_partner(caller: User | None) -> User:
    return require_role(caller, PARTNER_ROLES)


def verify_partner_ownership(caller: User | None, target_partner_id: str) -> User:
    """
    PLATFORM_OWNER accede a todos los partners; PARTNER_ADMIN solo al suyo.

    Raises:
        UnauthorizedError: sin llamador autenticado.
        ForbiddenError: rol insuficiente o partner distinto.
    """
    user = require_partner(caller)
    if user.role == UserRole.PLATFORM_OWNER:
        return user
    if user.role == UserRole.PARTNER_ADMIN:
        if user.partner_id is not None and user.partner_id == target_partner_id:
            return user
        raise ForbiddenError("Forbidden: Not authorized for this partner")
    raise ForbiddenError("Forbidden: Insufficient permissions")


def verify_user_ownership(caller: User | None, target_user_id: str) -> User:
    """El propio usuario o PLATFORM_OWNER."""
    user = require_role(caller, ANY_ROLE)
    if user.role == UserRole.PLATFORM_OWNER:
        return user
    if user.id != target_user_id:
        raise ForbiddenError()
    return user
