import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ProgramCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    host_id: uuid.UUID | None = None
    slug: str | None = None


class ProgramUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    host_id: uuid.UUID | None = None
    slug: str | None = None


class ProgramHost(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    telegram_account: str | None = None


class ProgramResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    host_id: uuid.UUID | None = None
    slug: str
    host: ProgramHost | None = None
    created_at: datetime

    @computed_field
    @property
    def host_name(self) -> str | None:
        return self.host.name if self.host else None


class ProgramListResponse(BaseModel):
    programs: list[ProgramResponse]
    total: int
    matched: int
