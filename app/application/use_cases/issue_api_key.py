import logging
from dataclasses import dataclass

from app.api.schemas.api_keys import CreateApiKeyRequest
from app.application.interfaces.api_key_repo import ApiKeyRepo
from app.application.interfaces.clock import Clock
from app.application.interfaces.partner_repo import PartnerRepo
from app.domain.entities.api_key import ApiKey
from app.domain.errors import UnknownPartnerError
from app.domain.value_objects.api_key_secret import DEFAULT_PREFIX, ApiKeySecret


@dataclass
class IssuedApiKey:
    api_key: ApiKey
    plain_text_key: str


class IssueApiKeyUseCase:
    """
    Emite una llave nueva. El texto plano se devuelve una única vez;
    solo el hash SHA-256 y el prefijo quedan persistidos.
    """

    def __init__(
        self,
        api_key_repo: ApiKeyRepo,
        partner_repo: PartnerRepo,
        clock: Clock,
        key_prefix: str = DEFAULT_PREFIX,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._partner_repo = partner_repo
        self._clock = clock
        self._key_prefix = key_prefix
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateApiKeyRequest) -> IssuedApiKey:
        if request.partner_id is not None:
            if not await self._partner_repo.get(request.partner_id):
                raise UnknownPartnerError(request.partner_id)

        secret = ApiKeySecret.generate(self._key_prefix)
        api_key = await self._api_key_repo.create(
            ApiKey(
                name=request.name,
                key_hash=secret.hash,
                prefix=secret.prefix,
                permissions=list(request.permissions),
                partner_id=request.partner_id,
                expires_at=request.expires_at,
                is_active=True,
                created_at=self._clock.now(),
            )
        )

        self._logger.info(
            "API key issued",
            extra={
                "api_key_id": api_key.id,
                "prefix": api_key.prefix,
                "partner_id": api_key.partner_id,
                "permissions": [p.value for p in api_key.permissions],
            },
        )
        return IssuedApiKey(api_key=api_key, plain_text_key=secret.plaintext)
