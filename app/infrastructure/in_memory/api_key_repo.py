from copy import deepcopy
from dataclasses import replace
from datetime import datetime
from typing import Sequence
from uuid import uuid4

from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.domain.entities.api_key import ApiKey


class InMemoryApiKeyRepo(ApiKeyRepo):
    def __init__(self) -> None:
        self._api_keys: dict[str, ApiKey] = {}

    async def get(self, api_key_id: str) -> ApiKey | None:
        api_key = self._api_keys.get(api_key_id)
        return deepcopy(api_key) if api_key else None

    async def get_by_hash(self, key_hash: str) -> ApiKey | None:
        for api_key in self._api_keys.values():
            if api_key.key_hash == key_hash:
                return deepcopy(api_key)
        return None

    async def create(self, api_key: ApiKey) -> ApiKey:
        stored = replace(api_key, id=api_key.id or str(uuid4()))
        self._api_keys[stored.id] = deepcopy(stored)
        return stored

    async def update(self, api_key: ApiKey) -> ApiKey:
        self._api_keys[api_key.id] = deepcopy(api_key)
        return api_key

    async def delete(self, api_key_id: str) -> None:
        self._api_keys.pop(api_key_id, None)

    async def list_all(self) -> Sequence[ApiKey]:
        keys = sorted(self._api_keys.values(), key=lambda k: k.created_at, reverse=True)
        return deepcopy(keys)

    async def touch_last_used(self, api_key_id: str, at: datetime) -> None:
        if api_key_id in self._api_keys:
            self._api_keys[api_key_id].last_used_at = at

    def clear(self) -> None:
        self._api_keys.clear()
