"""Entidad ApiKey - credencial bearer para la API externa."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ApiKeyPermission(str, Enum):
    READ = "read"
    WRITE = "write"
    LOGIN = "login"


@dataclass
class ApiKey:
    """
    Solo se guarda el hash SHA-256 del secreto y un prefijo visible.

    Sin `partner_id` la llave es de alcance global de la plataforma.
    """

    id: str | None = None
    name: str = ""
    key_hash: str = ""
    prefix: str = ""
    permissions: list[ApiKeyPermission] = field(default_factory=list)
    partner_id: str | None = None
    expires_at: datetime | None = None
    is_active: bool = True
    last_used_at: datetime | None = None
    created_at: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now

    def is_usable(self, now: datetime) -> bool:
        return self.is_active and not self.is_expired(now)

    def has_permission(self, permission: ApiKeyPermission | str) -> bool:
        return ApiKeyPermission(permission) in self.permissions
