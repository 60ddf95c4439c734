import uuid
from collections.abc import AsyncIterator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import ENUM as PG_ENUM, JSONB, UUID as PG_UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from radiolib.core.security import hash_password
from radiolib.db.base import Base
from radiolib.db.session import get_db
from radiolib.main import create_app
from radiolib.models.user import User, UserRole

# Fresh in-memory SQLite per test; StaticPool keeps the single connection alive
TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _register_sqlite_compilers():
    """Register SQLite-compatible compilers for PG types."""
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_UUID, "sqlite")
    def compile_uuid(type_, compiler, **kw):
        return "VARCHAR(36)"

    @compiles(JSONB, "sqlite")
    def compile_jsonb(type_, compiler, **kw):
        return "TEXT"

    @compiles(PG_ENUM, "sqlite")
    def compile_enum(type_, compiler, **kw):
        return "VARCHAR(50)"


_register_sqlite_compilers()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    import radiolib.models  # noqa: F401

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _make_user(db: AsyncSession, username: str, role: UserRole) -> User:
    user = User(
        id=uuid.uuid4(),
        username=username,
        hashed_password=hash_password("testpass123"),
        role=role,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "testadmin", UserRole.ADMIN)


@pytest_asyncio.fixture
async def regular_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "editor", UserRole.USER)


async def _login(client: AsyncClient, username: str) -> dict:
    response = await client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": "testpass123"},
    )
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient, admin_user: User) -> dict:
    return await _login(client, "testadmin")


@pytest_asyncio.fixture
async def user_headers(client: AsyncClient, regular_user: User) -> dict:
    return await _login(client, "editor")
