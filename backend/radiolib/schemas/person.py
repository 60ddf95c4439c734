import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PersonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    telegram_account: str | None = None


class PersonUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    telegram_account: str | None = None


class PersonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    telegram_account: str | None = None
    created_at: datetime


class PersonListResponse(BaseModel):
    people: list[PersonResponse]
    total: int
    matched: int
