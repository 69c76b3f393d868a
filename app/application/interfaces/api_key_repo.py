from datetime import datetime
from typing import Sequence

from app.domain.entities.api_key import ApiKey


class ApiKeyRepo:
    async def get(self, api_key_id: str) -> ApiKey | None:
        raise NotImplementedError

    async def get_by_hash(self, key_hash: str) -> ApiKey | None:
        raise NotImplementedError

    async def create(self, api_key: ApiKey) -> ApiKey:
        raise NotImplementedError

    async def update(self, api_key: ApiKey) -> ApiKey:
        raise NotImplementedError

    async def delete(self, api_key_id: str) -> None:
        raise NotImplementedError

    async def list_all(self) -> Sequence[ApiKey]:
        raise NotImplementedError

    async def touch_last_used(self, api_key_id: str, at: datetime) -> None:
        raise NotImplementedError
