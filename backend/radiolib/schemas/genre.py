import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GenreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class GenreUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)


class GenreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    created_at: datetime


class GenreListResponse(BaseModel):
    genres: list[GenreResponse]
    total: int
    matched: int
