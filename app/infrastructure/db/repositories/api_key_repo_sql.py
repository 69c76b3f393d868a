from datetime import datetime
from typing import Any, Sequence
from uuid import uuid4

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.domain.entities.api_key import ApiKey, ApiKeyPermission
from app.infrastructure.db.tables import api_keys, utc


def _to_entity(row: Any) -> ApiKey:
    return ApiKey(
        id=row["id"],
        name=row["name"],
        key_hash=row["key_hash"],
        prefix=row["prefix"],
        permissions=[ApiKeyPermission(p) for p in row["permissions"] or []],
        partner_id=row["partner_id"],
        expires_at=utc(row["expires_at"]),
        is_active=bool(row["is_active"]),
        last_used_at=utc(row["last_used_at"]),
        created_at=utc(row["created_at"]),
    )


class ApiKeyRepoSQL(ApiKeyRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _first(self, stmt) -> ApiKey | None:
        result = await self._session.execute(stmt.limit(1))
        row = result.mappings().first()
        return _to_entity(row) if row else None

    async def get(self, api_key_id: str) -> ApiKey | None:
        return await self._first(select(api_keys).where(api_keys.c.id == api_key_id))

    async def get_by_hash(self, key_hash: str) -> ApiKey | None:
        return await self._first(select(api_keys).where(api_keys.c.key_hash == key_hash))

    async def create(self, api_key: ApiKey) -> ApiKey:
        api_key_id = api_key.id or str(uuid4())
        await self._session.execute(
            insert(api_keys).values(
                id=api_key_id,
                name=api_key.name,
                key_hash=api_key.key_hash,
                prefix=api_key.prefix,
                permissions=[p.value for p in api_key.permissions],
                partner_id=api_key.partner_id,
                expires_at=api_key.expires_at,
                is_active=api_key.is_active,
                created_at=api_key.created_at,
            )
        )
        return await self.get(api_key_id)

    async def update(self, api_key: ApiKey) -> ApiKey:
        await self._session.execute(
            update(api_keys)
            .where(api_keys.c.id == api_key.id)
            .values(
                name=api_key.name,
                permissions=[p.value for p in api_key.permissions],
                expires_at=api_key.expires_at,
                is_active=api_key.is_active,
            )
        )
        return await self.get(api_key.id)

    async def delete(self, api_key_id: str) -> None:
        await self._session.execute(delete(api_keys).where(api_keys.c.id == api_key_id))

    async def list_all(self) -> Sequence[ApiKey]:
        result = await self._session.execute(
            select(api_keys).order_by(api_keys.c.created_at.desc())
        )
        return [_to_entity(row) for row in result.mappings().all()]

    async def touch_last_used(self, api_key_id: str, at: datetime) -> None:
        await self._session.execute(
            update(api_keys).where(api_keys.c.id == api_key_id).values(last_used_at=at)
        )
