import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user, require_admin
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.program import ProgramCreate, ProgramListResponse, ProgramResponse, ProgramUpdate
from radiolib.services.filter_service import summarize
from radiolib.services.filter_state import get_filter_state
from radiolib.services.program_service import (
    create_program,
    delete_program,
    get_program,
    get_program_by_slug,
    list_programs,
    update_program,
)

router = APIRouter(prefix="/programs", tags=["programs"])


@router.post("", response_model=ProgramResponse, status_code=201)
async def create(
    body: ProgramCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await create_program(db, body)


@router.get("", response_model=ProgramListResponse)
async def list_all(
    filtered: bool = Query(True),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    # host_name is computed on the response model, and search reads it
    programs = [ProgramResponse.model_validate(p) for p in await list_programs(db)]
    if not filtered:
        return ProgramListResponse(programs=programs, total=len(programs), matched=len(programs))
    state = await get_filter_state(db, user.id)
    summary = summarize("programs", programs, state)
    return ProgramListResponse(programs=summary["items"], total=summary["total"], matched=summary["matched"])


@router.get("/by-slug/{slug}", response_model=ProgramResponse)
async def get_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await get_program_by_slug(db, slug)


@router.get("/{program_id}", response_model=ProgramResponse)
async def get(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await get_program(db, program_id)


@router.patch("/{program_id}", response_model=ProgramResponse)
async def update(
    program_id: uuid.UUID,
    body: ProgramUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    return await update_program(db, program_id, body)


@router.delete("/{program_id}", status_code=204)
async def remove(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    await delete_program(db, program_id)
