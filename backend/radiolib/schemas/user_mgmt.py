import uuid

from pydantic import BaseModel, ConfigDict

from radiolib.models.user import UserRole


class UserUpdate(BaseModel):
    username: str | None = None
    password: str | None = None
    role: str | None = None
    display_name: str | None = None
    is_active: bool | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID | str
    username: str
    role: UserRole
    is_active: bool
    display_name: str | None = None


class UserListResponse(BaseModel):
    users: list[UserOut]
    total: int
