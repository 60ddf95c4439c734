import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.core.exceptions import NotFoundError
from radiolib.models.person import Person
from radiolib.schemas.person import PersonCreate, PersonUpdate

logger = logging.getLogger(__name__)


def clean_telegram_account(value: str | None) -> str | None:
    """Strip one leading "@" and surrounding whitespace; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    if value.startswith("@"):
        value = value[1:]
    return value or None


async def create_person(db: AsyncSession, data: PersonCreate) -> Person:
    person = Person(name=data.name, telegram_account=clean_telegram_account(data.telegram_account))
    db.add(person)
    await db.flush()
    await db.refresh(person)
    logger.info("Created person %s (%s)", person.id, person.name)
    return person


async def get_person(db: AsyncSession, person_id: uuid.UUID) -> Person:
    result = await db.execute(select(Person).where(Person.id == person_id))
    person = result.scalar_one_or_none()
    if not person:
        raise NotFoundError(f"Person {person_id} not found")
    return person


async def list_people(db: AsyncSession) -> list[Person]:
    result = await db.execute(select(Person).order_by(Person.created_at))
    return list(result.scalars().all())


async def update_person(db: AsyncSession, person_id: uuid.UUID, data: PersonUpdate) -> Person:
    person = await get_person(db, person_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    if "telegram_account" in update_data:
        update_data["telegram_account"] = clean_telegram_account(update_data["telegram_account"])
    for field, value in update_data.items():
        setattr(person, field, value)
    await db.flush()
    await db.refresh(person)
    return person


async def delete_person(db: AsyncSession, person_id: uuid.UUID) -> None:
    # recording_people rows cascade; programs hosted by this person keep running without a host
    result = await db.execute(delete(Person).where(Person.id == person_id))
    if result.rowcount == 0:
        raise NotFoundError(f"Person {person_id} not found")
    await db.flush()
    logger.info("Deleted person %s", person_id)
