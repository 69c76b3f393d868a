import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.api_key import ApiKey, ApiKeyPermission
from app.domain.errors import ApiKeyPermissionError, InvalidApiKeyError
from app.domain.value_objects.api_key_secret import hash_secret


@dataclass(frozen=True)
class ApiKeyContext:
    api_key: ApiKey
    partner_id: str | None


class AuthenticateApiKeyUseCase:
    def __init__(
        self,
        api_key_repo: ApiKeyRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        raw_key: str | None,
        required_permissions: Iterable[ApiKeyPermission] = (),
    ) -> ApiKeyContext:
        """
        Valida el header X-API-Key.

        Raises:
            InvalidApiKeyError: ausente, desconocida, inactiva o vencida (401).
            ApiKeyPermissionError: le falta un permiso requerido (403).
        """
        if not raw_key:
            raise InvalidApiKeyError()

        now = self._clock.now()
        api_key = await self._api_key_repo.get_by_hash(hash_secret(raw_key))
        if not api_key or not api_key.is_usable(now):
            self._logger.warning(
                "API key authentication failed",
                extra={
                    "prefix": raw_key[:12],
                    "reason": "unknown" if not api_key else "inactive_or_expired",
                },
            )
            raise InvalidApiKeyError()

        for permission in required_permissions:
            if not api_key.has_permission(permission):
                self._logger.warning(
                    "API key missing permission",
                    extra={"api_key_id": api_key.id, "permission": permission.value},
                )
                raise ApiKeyPermissionError(permission.value)

        try:
            async with self._transaction_manager.start():
                await self._api_key_repo.touch_last_used(api_key.id, now)
        except Exception:
            self._logger.warning(
                "Could not update API key last_used_at",
                extra={"api_key_id": api_key.id},
                exc_info=True,
            )

        return ApiKeyContext(api_key=api_key, partner_id=api_key.partner_id)
