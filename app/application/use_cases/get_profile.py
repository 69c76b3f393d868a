from app.application.access_control import ANY_ROLE, require_role
from app.domain.entities.user import User
from app.domain.errors import UserNotFoundError


class GetProfileUseCase:
    async def execute(self, caller: User | None) -> User:
        """Perfil del usuario de la sesión; un usuario suspendido se reporta como inexistente."""
        user = require_role(caller, ANY_ROLE)
        if user.is_blacklisted:
            raise UserNotFoundError()
        return user
