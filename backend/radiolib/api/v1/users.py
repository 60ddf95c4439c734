import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import require_admin
from radiolib.core.exceptions import BadRequestError, ConflictError, NotFoundError
from radiolib.core.security import hash_password
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.user_mgmt import UserListResponse, UserOut, UserUpdate
from radiolib.services.auth_service import parse_role

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    count_result = await db.execute(select(func.count()).select_from(User))
    total = count_result.scalar() or 0
    result = await db.execute(select(User).offset(skip).limit(limit).order_by(User.created_at))
    users = result.scalars().all()
    return UserListResponse(users=users, total=total)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.patch("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: uuid.UUID,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    update_data = body.model_dump(exclude_unset=True)
    if "username" in update_data and update_data["username"] != user.username:
        existing = await db.execute(
            select(User).where(func.lower(User.username) == update_data["username"].lower())
        )
        if existing.scalar_one_or_none():
            raise ConflictError("A user with this identifier already exists")
    if "password" in update_data:
        password = update_data.pop("password")
        if password:
            user.hashed_password = hash_password(password)
    if "role" in update_data:
        update_data["role"] = parse_role(update_data["role"])

    for field, value in update_data.items():
        setattr(user, field, value)
    await db.flush()
    await db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    if user_id == admin.id:
        raise BadRequestError("Cannot delete your own account")
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    await db.delete(user)
    await db.flush()
