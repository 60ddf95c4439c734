import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.exceptions import NotFoundError
from radiolib.models.genre import Genre
from radiolib.schemas.genre import GenreCreate, GenreUpdate

logger = logging.getLogger(__name__)


async def create_genre(db: AsyncSession, data: GenreCreate) -> Genre:
    genre = Genre(**data.model_dump())
    db.add(genre)
    await db.flush()
    await db.refresh(genre)
    return genre


async def get_genre(db: AsyncSession, genre_id: uuid.UUID) -> Genre:
    result = await db.execute(select(Genre).where(Genre.id == genre_id))
    genre = result.scalar_one_or_none()
    if not genre:
        raise NotFoundError(f"Genre {genre_id} not found")
    return genre


async def list_genres(db: AsyncSession) -> list[Genre]:
    result = await db.execute(select(Genre).order_by(Genre.name))
    return list(result.scalars().all())


async def update_genre(db: AsyncSession, genre_id: uuid.UUID, data: GenreUpdate) -> Genre:
    genre = await get_genre(db, genre_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    for field, value in update_data.items():
        setattr(genre, field, value)
    await db.flush()
    await db.refresh(genre)
    return genre


async def delete_genre(db: AsyncSession, genre_id: uuid.UUID) -> None:
    result = await db.execute(delete(Genre).where(Genre.id == genre_id))
    if result.rowcount == 0:
        raise NotFoundError(f"Genre {genre_id} not found")
    await db.flush()
    logger.info("Deleted genre %s", genre_id)
