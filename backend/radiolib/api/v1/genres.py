import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user, require_admin
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.genre import GenreCreate, GenreListResponse, GenreResponse, GenreUpdate
from radiolib.schemas.recording import GenreRecording
from radiolib.services.filter_service import summarize
from radiolib.services.filter_state import get_filter_state
from radiolib.services.genre_service import create_genre, delete_genre, get_genre, list_genres, update_genre
from radiolib.services.recording_service import get_recordings_for_genre

router = APIRouter(prefix="/genres", tags=["genres"])


@router.post("", response_model=GenreResponse, status_code=201)
async def create(
    body: GenreCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await create_genre(db, body)


@router.get("", response_model=GenreListResponse)
async def list_all(
    filtered: bool = Query(True),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    genres = await list_genres(db)
    if not filtered:
        return GenreListResponse(genres=genres, total=len(genres), matched=len(genres))
    state = await get_filter_state(db, user.id)
    summary = summarize("genres", genres, state)
    return GenreListResponse(genres=summary["items"], total=summary["total"], matched=summary["matched"])


@router.get("/{genre_id}", response_model=GenreResponse)
async def get(
    genre_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await get_genre(db, genre_id)


@router.get("/{genre_id}/recordings", response_model=list[GenreRecording])
async def recordings(
    genre_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    await get_genre(db, genre_id)
    return await get_recordings_for_genre(db, genre_id)


@router.patch("/{genre_id}", response_model=GenreResponse)
async def update(
    genre_id: uuid.UUID,
    body: GenreUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await update_genre(db, genre_id, body)


@router.delete("/{genre_id}", status_code=204)
async def remove(
    genre_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    await delete_genre(db, genre_id)
