import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user, require_admin
from radiolib.core.exceptions import AppError, BadRequestError, ConflictError, NotFoundError
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.recording import RecordingCreated, RecordingForm, RecordingFormData, RecordingListResponse
from radiolib.services.filter_service import summarize
from radiolib.services.filter_state import get_filter_state
from radiolib.services.recording_service import (
    create_recording_with_relations,
    delete_recording_with_relations,
    get_recording_for_form,
    list_recordings,
    update_recording_with_relations,
)
from radiolib.services.result import ActionResult, ErrorKind

router = APIRouter(prefix="/recordings", tags=["recordings"])

_ERRORS: dict[ErrorKind, type[AppError]] = {
    ErrorKind.VALIDATION: BadRequestError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.PERSISTENCE: ConflictError,
}


def _unwrap(result: ActionResult):
    if not result.success:
        error_cls = _ERRORS.get(result.error_kind, ConflictError)
        raise error_cls(result.error)
    return result.data


@router.post("", response_model=RecordingCreated, status_code=201)
async def create(
    body: RecordingFormData,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return _unwrap(await create_recording_with_relations(db, body))


@router.get("", response_model=RecordingListResponse)
async def list_all(
    filtered: bool = Query(True),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    items = await list_recordings(db)
    if not filtered:
        return RecordingListResponse(recordings=items, total=len(items), matched=len(items))
    state = await get_filter_state(db, user.id)
    summary = summarize("recordings", items, state)
    return RecordingListResponse(recordings=summary["items"], total=summary["total"], matched=summary["matched"])


@router.get("/{recording_id}", response_model=RecordingForm)
async def get(
    recording_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return _unwrap(await get_recording_for_form(db, recording_id))


@router.put("/{recording_id}", status_code=204)
async def update(
    recording_id: uuid.UUID,
    body: RecordingFormData,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    _unwrap(await update_recording_with_relations(db, recording_id, body))


@router.delete("/{recording_id}", status_code=204)
async def remove(
    recording_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    _unwrap(await delete_recording_with_relations(db, recording_id))
