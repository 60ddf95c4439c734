from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.dependencies import get_current_user, require_admin
from radiolib.db.session import get_db
from radiolib.models.user import User
from radiolib.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse, UserResponse
from radiolib.services.auth_service import authenticate_user, create_tokens, refresh_access_token, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await authenticate_user(db, body.username, body.password)
    return create_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    return await refresh_access_token(db, body.refresh_token)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    """Admin-only account creation; there is no public sign-up."""
    return await register_user(db, body.username, body.password, body.role, body.display_name)
