from copy import deepcopy
from datetime import datetime

from app.application.interfaces.user_repo import UserRepo
from app.domain.entities.user import User


class InMemoryUserRepo(UserRepo):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        # token_hash -> (user_id, expires_at)
        self._sessions: dict[str, tuple[str, datetime]] = {}

    async def get(self, user_id: str) -> User | None:
        user = self._users.get(user_id)
        return deepcopy(user) if user else None

    async def add(self, user: User) -> User:
        self._users[user.id] = deepcopy(user)
        return user

    async def get_by_session(self, token_hash: str, now: datetime) -> User | None:
        session = self._sessions.get(token_hash)
        if not session or session[1] <= now:
            return None
        return await self.get(session[0])

    async def add_session(self, user_id: str, token_hash: str, expires_at: datetime) -> None:
        self._sessions[token_hash] = (user_id, expires_at)

    def clear(self) -> None:
        self._users.clear()
        self._sessions.clear()
