from datetime import datetime
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.user_repo import UserRepo
from app.domain.entities.user import User, UserRole
from app.infrastructure.db.tables import sessions, users


def _to_entity(row: Any) -> User:
    return User(
        id=row["id"],
        role=UserRole(row["role"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row["phone"],
        partner_id=row["partner_id"],
        is_blacklisted=bool(row["is_blacklisted"]),
    )


class UserRepoSQL(UserRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> User | None:
        result = await self._session.execute(select(users).where(users.c.id == user_id).limit(1))
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def add(self, user: User) -> User:
        await self._session.execute(
            insert(users).values(
                id=user.id,
                role=user.role.value,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                phone=user.phone,
                partner_id=user.partner_id,
                is_blacklisted=user.is_blacklisted,
            )
        )
        return user

    async def get_by_session(self, token_hash: str, now: datetime) -> User | None:
        stmt = (
            select(users)
            .join(sessions, sessions.c.user_id == users.c.id)
            .where(sessions.c.token_hash == token_hash, sessions.c.expires_at > now)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def add_session(self, user_id: str, token_hash: str, expires_at: datetime) -> None:
        await self._session.execute(
            insert(sessions).values(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        )
