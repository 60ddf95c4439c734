import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.config import settings
from radiolib.core.exceptions import ConflictError, UnauthorizedError
from radiolib.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from radiolib.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User:
    result = await db.execute(select(User).where(func.lower(User.username) == username.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid username or password")

    if not user.is_active:
        raise UnauthorizedError("Account is disabled")

    return user


def create_tokens(user: User) -> dict:
    access_token = create_access_token(
        subject=str(user.id),
        extra_claims={"role": user.role.value},
    )
    refresh_token = create_refresh_token(subject=str(user.id))
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


async def refresh_access_token(db: AsyncSession, refresh_token: str) -> dict:
    try:
        payload = decode_token(refresh_token)
    except ValueError:
        raise UnauthorizedError("Invalid refresh token")

    if payload.get("type") != "refresh":
        raise UnauthorizedError("Invalid token type")

    user_id_str = payload.get("sub")
    try:
        user_id = uuid.UUID(user_id_str)
    except (ValueError, TypeError):
        raise UnauthorizedError("Invalid refresh token")
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    return create_tokens(user)


def parse_role(value: str | None) -> UserRole:
    return UserRole(value) if value in [r.value for r in UserRole] else UserRole.USER


async def register_user(
    db: AsyncSession,
    username: str,
    password: str,
    role: str | None = None,
    display_name: str | None = None,
) -> User:
    existing = await db.execute(select(User).where(func.lower(User.username) == username.lower()))
    if existing.scalar_one_or_none():
        raise ConflictError("A user with this identifier already exists")

    user = User(
        id=uuid.uuid4(),
        username=username,
        hashed_password=hash_password(password),
        role=parse_role(role),
        display_name=display_name,
        is_active=True,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered user %s with role %s", user.username, user.role.value)
    return user


async def seed_admin(db: AsyncSession) -> User | None:
    """Create the configured admin account when no users exist yet."""
    if not settings.ADMIN_PASSWORD:
        return None
    count = (await db.execute(select(func.count()).select_from(User))).scalar() or 0
    if count:
        return None
    admin = await register_user(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD, role=UserRole.ADMIN.value)
    await db.commit()
    return admin
