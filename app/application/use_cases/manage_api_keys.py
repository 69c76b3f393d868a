import logging
from dataclasses import replace

from app.api.schemas.api_keys import UpdateApiKeyRequest
from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.domain.entities.api_key import ApiKey
from app.domain.errors import ApiKeyNotFoundError

logger = logging.getLogger(__name__)


class ListApiKeysUseCase:
    def __init__(self, api_key_repo: ApiKeyRepo):
        self._api_key_repo = api_key_repo

    async def execute(self) -> list[ApiKey]:
        return list(await self._api_key_repo.list_all())


class UpdateApiKeyUseCase:
    def __init__(self, api_key_repo: ApiKeyRepo):
        self._api_key_repo = api_key_repo

    async def execute(self, api_key_id: str, request: UpdateApiKeyRequest) -> ApiKey:
        api_key = await self._api_key_repo.get(api_key_id)
        if not api_key:
            raise ApiKeyNotFoundError(api_key_id)

        # Solo los campos enviados; `expires_at: null` explícito borra el vencimiento.
        values = {
            name: getattr(request, name)
            for name in request.model_fields_set
            if name == "expires_at" or getattr(request, name) is not None
        }
        if "permissions" in values:
            values["permissions"] = list(values["permissions"])

        updated = await self._api_key_repo.update(replace(api_key, **values))
        if api_key.is_active and not updated.is_active:
            logger.info("API key revoked", extra={"api_key_id": updated.id, "prefix": updated.prefix})
        return updated


class DeleteApiKeyUseCase:
    def __init__(self, api_key_repo: ApiKeyRepo):
        self._api_key_repo = api_key_repo

    async def execute(self, api_key_id: str) -> None:
        api_key = await self._api_key_repo.get(api_key_id)
        if not api_key:
            raise ApiKeyNotFoundError(api_key_id)
        await self._api_key_repo.delete(api_key_id)
        logger.info("API key deleted", extra={"api_key_id": api_key_id, "prefix": api_key.prefix})
