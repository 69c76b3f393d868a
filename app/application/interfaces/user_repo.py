from datetime import datetime

from app.domain.entities.user import User


class UserRepo:
    async def get(self, user_id: str) -> User | None:
        raise NotImplementedError

    async def add(self, user: User) -> User:
        raise NotImplementedError

    async def get_by_session(self, token_hash: str, now: datetime) -> User | None:
        """Usuario dueño de una sesión vigente cuyo token tiene hash `token_hash`."""
        raise NotImplementedError

    async def add_session(self, user_id: str, token_hash: str, expires_at: datetime) -> None:
        raise NotImplementedError
