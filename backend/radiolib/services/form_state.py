"""State transitions for the recording edit form.

This is the contract a client form follows: the server keeps no form state, and
the API only ever sees the final ``RecordingFormData`` these transitions build.

``reduce_form(state, action)`` returns a new ``RecordingFormState``; the old
one is left untouched, so the form logic can be exercised without any UI.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Literal

from radiolib.schemas.recording import RecordingForm, RecordingFormData

MultiSelectField = Literal["genre_ids", "hosts", "guests"]

REQUIRED_FIELDS = ("program_id", "episode_title", "release_date", "file_url")

_SCALAR_FIELDS = {
    "program_id",
    "episode_title",
    "description",
    "type",
    "release_date",
    "duration",
    "status",
    "keywords",
    "file_url",
}


@dataclass(frozen=True)
class RecordingFormState:
    program_id: str = ""
    episode_title: str = ""
    description: str = ""
    type: str = "live"
    release_date: date | None = field(default_factory=date.today)
    duration: int | None = None
    status: str = "published"
    keywords: str = ""
    genre_ids: tuple[str, ...] = ()
    hosts: tuple[str, ...] = ()
    guests: tuple[str, ...] = ()
    file_url: str = ""


@dataclass(frozen=True)
class SetField:
    name: str
    value: Any


@dataclass(frozen=True)
class ToggleItem:
    field: MultiSelectField
    item_id: str


@dataclass(frozen=True)
class FileUploaded:
    file_url: str
    duration: int | None = None


@dataclass(frozen=True)
class Loaded:
    form: RecordingForm


@dataclass(frozen=True)
class ResetForm:
    pass


FormAction = SetField | ToggleItem | FileUploaded | Loaded | ResetForm


def _toggle(values: tuple[str, ...], item_id: str) -> tuple[str, ...]:
    if item_id in values:
        return tuple(v for v in values if v != item_id)
    return values + (item_id,)


def _from_loaded(form: RecordingForm) -> RecordingFormState:
    rec = form.recording
    return RecordingFormState(
        program_id=str(rec.program_id),
        episode_title=rec.episode_title,
        description=rec.description or "",
        type=rec.type.value,
        release_date=rec.release_date,
        duration=rec.duration or None,
        status=rec.status.value,
        keywords=rec.keywords or "",
        genre_ids=tuple(str(g) for g in form.genre_ids),
        hosts=tuple(str(h) for h in form.hosts),
        guests=tuple(str(g) for g in form.guests),
        file_url=rec.file_url,
    )


def reduce_form(state: RecordingFormState, action: FormAction) -> RecordingFormState:
    if isinstance(action, SetField):
        if action.name not in _SCALAR_FIELDS:
            raise ValueError(f"Unknown form field: {action.name}")
        return replace(state, **{action.name: action.value})
    if isinstance(action, ToggleItem):
        return replace(state, **{action.field: _toggle(getattr(state, action.field), action.item_id)})
    if isinstance(action, FileUploaded):
        return replace(state, file_url=action.file_url, duration=action.duration)
    if isinstance(action, Loaded):
        return _from_loaded(action.form)
    if isinstance(action, ResetForm):
        return RecordingFormState()
    raise TypeError(f"Unknown form action: {action!r}")


def missing_required_fields(state: RecordingFormState) -> list[str]:
    return [name for name in REQUIRED_FIELDS if not getattr(state, name)]


def to_form_data(state: RecordingFormState) -> RecordingFormData:
    """Build the submit payload. Blank optional strings and a zero duration become None."""
    return RecordingFormData(
        program_id=state.program_id,
        episode_title=state.episode_title,
        description=state.description or None,
        type=state.type,
        release_date=state.release_date,
        duration=state.duration or None,
        status=state.status,
        keywords=state.keywords or None,
        file_url=state.file_url,
        genre_ids=list(state.genre_ids),
        hosts=list(state.hosts),
        guests=list(state.guests),
    )
