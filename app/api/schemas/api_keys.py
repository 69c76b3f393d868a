from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

from app.api.schemas.common import as_utc
from app.domain.entities.api_key import ApiKeyPermission


class CreateApiKeyRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    partner_id: str | None = None
    permissions: list[ApiKeyPermission] = Field(min_length=1)
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def normalize_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @field_validator("permissions")
    @classmethod
    def dedupe_permissions(cls, value: list[ApiKeyPermission]) -> list[ApiKeyPermission]:
        return list(dict.fromkeys(value))


class UpdateApiKeyRequest(BaseModel):
    """Only fields present in the body are applied; `expires_at: null` clears the expiry."""

    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=100) | None = None
    permissions: list[ApiKeyPermission] | None = Field(default=None, min_length=1)
    is_active: bool | None = None
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def normalize_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class ApiKeyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    prefix: str
    permissions: list[ApiKeyPermission]
    partner_id: str | None = None
    expires_at: datetime | None = None
    is_active: bool
    last_used_at: datetime | None = None
    created_at: datetime | None = None


class ApiKeyListResponse(BaseModel):
    api_keys: list[ApiKeyResponse]


class ApiKeyEnvelope(BaseModel):
    api_key: ApiKeyResponse


class IssuedApiKeyResponse(BaseModel):
    api_key: ApiKeyResponse
    plain_text_key: str
    message: str = "Save this key now. It will not be shown again."
