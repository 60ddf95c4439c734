import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user, require_admin
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.person import PersonCreate, PersonListResponse, PersonResponse, PersonUpdate
from radiolib.schemas.recording import PersonRecording
from radiolib.services.filter_service import summarize
from radiolib.services.filter_state import get_filter_state
from radiolib.services.person_service import create_person, delete_person, get_person, list_people, update_person
from radiolib.services.recording_service import get_recordings_for_person

router = APIRouter(prefix="/people", tags=["people"])


@router.post("", response_model=PersonResponse, status_code=201)
async def create(
    body: PersonCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await create_person(db, body)


@router.get("", response_model=PersonListResponse)
async def list_all(
    filtered: bool = Query(True, description="Apply the caller's saved search, filters and sort"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    people = await list_people(db)
    if not filtered:
        return PersonListResponse(people=people, total=len(people), matched=len(people))
    state = await get_filter_state(db, user.id)
    summary = summarize("people", people, state)
    return PersonListResponse(people=summary["items"], total=summary["total"], matched=summary["matched"])


@router.get("/{person_id}", response_model=PersonResponse)
async def get(
    person_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await get_person(db, person_id)


@router.get("/{person_id}/recordings", response_model=list[PersonRecording])
async def recordings(
    person_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    await get_person(db, person_id)
    return await get_recordings_for_person(db, person_id)


@router.patch("/{person_id}", response_model=PersonResponse)
async def update(
    person_id: uuid.UUID,
    body: PersonUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await update_person(db, person_id, body)


@router.delete("/{person_id}", status_code=204)
async def remove(
    person_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    await delete_person(db, person_id)
