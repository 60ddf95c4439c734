import logging
import time

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from radiolib.config import settings

logger = logging.getLogger(__name__)


def log_slow_queries(target: AsyncEngine, threshold: float) -> None:
    """Warn about every statement on ``target`` that runs for ``threshold`` seconds or more.

    A threshold of zero or less leaves the engine untouched.
    """
    if threshold <= 0:
        return
    sync_engine = target.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _started(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("radiolib_query_start", []).append(time.monotonic())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _finished(conn, cursor, statement, parameters, context, executemany):
        starts = conn.info.get("radiolib_query_start")
        if not starts:
            return
        elapsed = time.monotonic() - starts.pop()
        if elapsed >= threshold:
            logger.warning("Slow query (%.3fs): %s", elapsed, " ".join(statement.split())[:300])


def build_engine(url: str) -> AsyncEngine:
    kwargs = {"echo": settings.DB_ECHO}
    if url.startswith("postgresql"):
        kwargs.update(pool_pre_ping=True, pool_recycle=settings.DB_POOL_RECYCLE_SECONDS)
    new_engine = create_async_engine(url, **kwargs)
    log_slow_queries(new_engine, settings.SLOW_QUERY_SECONDS)
    return new_engine


engine = build_engine(settings.DATABASE_URL)

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
