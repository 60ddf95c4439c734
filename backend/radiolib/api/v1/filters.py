from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.filters import FilterState, FilterStateUpdate
from radiolib.services.filter_state import ResetFilters, UpdateFilters, dispatch_filter_action, get_filter_state

router = APIRouter(prefix="/filters", tags=["filters"])


@router.get("", response_model=FilterState, response_model_by_alias=True)
async def read(db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    return await get_filter_state(db, user.id)


@router.patch("", response_model=FilterState, response_model_by_alias=True)
async def update(
    body: FilterStateUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Merge the submitted fields into the caller's saved state."""
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    return await dispatch_filter_action(db, user.id, UpdateFilters(updates))


@router.delete("", response_model=FilterState, response_model_by_alias=True)
async def reset(db: AsyncSession = Depends(get_db), user: User = Depends(get_current_user)):
    return await dispatch_filter_action(db, user.id, ResetFilters())
