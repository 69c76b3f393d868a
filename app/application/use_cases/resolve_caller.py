from app.application.interfaces.clock import Clock
from app.application.interfaces.user_repo import UserRepo
from app.domain.entities.user import User
from app.domain.value_objects.api_key_secret import hash_secret


class ResolveCallerUseCase:
    """Usuario de una sesión vigente. Solo se persiste el hash del token."""

    def __init__(self, user_repo: UserRepo, clock: Clock):
        self._user_repo = user_repo
        self._clock = clock

    async def execute(self, session_token: str | None) -> User | None:
        if not session_token:
            return None
        return await self._user_repo.get_by_session(hash_secret(session_token), self._clock.now())
