import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from radiolib.models.recording import PersonRole, RecordingStatus, RecordingType


class RecordingFormData(BaseModel):
    """Everything the recording form submits: scalar fields plus the full relation sets.

    Relations are replaced wholesale on update, so ``genre_ids``, ``hosts`` and
    ``guests`` must always carry the complete desired membership.
    """

    program_id: uuid.UUID
    episode_title: str = Field(min_length=1, max_length=500)
    description: str | None = None
    type: RecordingType = RecordingType.LIVE
    release_date: date
    duration: int | None = Field(default=None, ge=0)
    status: RecordingStatus = RecordingStatus.PUBLISHED
    keywords: str | None = None
    file_url: str = Field(min_length=1)
    genre_ids: list[uuid.UUID] = []
    hosts: list[uuid.UUID] = []
    guests: list[uuid.UUID] = []


class RecordingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    program_id: uuid.UUID
    episode_title: str
    description: str | None = None
    type: RecordingType
    release_date: date
    duration: int | None = None
    status: RecordingStatus
    keywords: str | None = None
    file_url: str
    created_at: datetime


class RecordingCreated(BaseModel):
    id: uuid.UUID


class RecordingForm(BaseModel):
    """Shape returned for editing; feeds straight back into an update."""

    recording: RecordingResponse
    genre_ids: list[uuid.UUID]
    hosts: list[uuid.UUID]
    guests: list[uuid.UUID]


class RecordingListItem(RecordingResponse):
    program_name: str | None = None
    people_names: str = ""
    genre_ids: list[uuid.UUID] = []


class RecordingListResponse(BaseModel):
    recordings: list[RecordingListItem]
    total: int
    matched: int


class PersonRecording(BaseModel):
    recording_id: uuid.UUID
    episode_title: str
    release_date: date
    status: RecordingStatus
    role: PersonRole


class GenreRecording(BaseModel):
    recording_id: uuid.UUID
    episode_title: str
    release_date: date
    status: RecordingStatus
