from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.db.engine import async_session_factory


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; route handlers that return normally are committed."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
