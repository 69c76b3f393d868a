from pydantic import BaseModel, ConfigDict

from app.domain.entities.user import UserRole


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None
    phone: str | None = None
    first_name: str
    last_name: str
    role: UserRole
    partner_id: str | None = None


class UserEnvelope(BaseModel):
    user: UserResponse
