import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from radiolib.core.exceptions import BadRequestError, ConflictError, NotFoundError
from radiolib.core.slug import generate_slug
from radiolib.models.person import Person
from radiolib.models.program import Program
from radiolib.models.recording import Recording
from radiolib.schemas.program import ProgramCreate, ProgramUpdate

logger = logging.getLogger(__name__)


def resolve_slug(name: str, slug: str | None) -> str:
    """Use the submitted slug when given (cleaned the same way), otherwise derive one from the name."""
    candidate = generate_slug(slug) if slug and slug.strip() else generate_slug(name)
    if not candidate:
        raise BadRequestError("Cannot derive a slug from this name; please provide one")
    return candidate


async def _ensure_host_exists(db: AsyncSession, host_id: uuid.UUID | None) -> None:
    if host_id is None:
        return
    result = await db.execute(select(Person.id).where(Person.id == host_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError(f"Person {host_id} not found")


async def create_program(db: AsyncSession, data: ProgramCreate) -> Program:
    await _ensure_host_exists(db, data.host_id)
    program = Program(
        name=data.name,
        description=data.description or None,
        host_id=data.host_id,
        slug=resolve_slug(data.name, data.slug),
    )
    db.add(program)
    await db.flush()
    logger.info("Created program %s with slug %s", program.id, program.slug)
    return await get_program(db, program.id)


async def get_program(db: AsyncSession, program_id: uuid.UUID) -> Program:
    result = await db.execute(
        select(Program).options(selectinload(Program.host)).where(Program.id == program_id)
        .execution_options(populate_existing=True)
    )
    program = result.scalar_one_or_none()
    if not program:
        raise NotFoundError(f"Program {program_id} not found")
    return program


async def get_program_by_slug(db: AsyncSession, slug: str) -> Program:
    result = await db.execute(
        select(Program).options(selectinload(Program.host)).where(Program.slug == slug)
    )
    program = result.scalars().first()
    if not program:
        raise NotFoundError(f"Program '{slug}' not found")
    return program


async def list_programs(db: AsyncSession) -> list[Program]:
    result = await db.execute(
        select(Program).options(selectinload(Program.host)).order_by(Program.created_at)
    )
    return list(result.scalars().all())


async def update_program(db: AsyncSession, program_id: uuid.UUID, data: ProgramUpdate) -> Program:
    program = await get_program(db, program_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    if "host_id" in update_data:
        await _ensure_host_exists(db, update_data["host_id"])
    if "slug" in update_data or "name" in update_data:
        name = update_data.get("name", program.name)
        update_data["slug"] = resolve_slug(name, update_data.get("slug", program.slug))
    for field, value in update_data.items():
        setattr(program, field, value)
    await db.flush()
    return await get_program(db, program_id)


async def delete_program(db: AsyncSession, program_id: uuid.UUID) -> None:
    recordings = await db.execute(select(Recording.id).where(Recording.program_id == program_id).limit(1))
    if recordings.scalar_one_or_none() is not None:
        raise ConflictError("Program still has recordings; delete them first")
    try:
        result = await db.execute(delete(Program).where(Program.id == program_id))
    except IntegrityError as e:
        raise ConflictError(str(e.orig)) from e
    if result.rowcount == 0:
        raise NotFoundError(f"Program {program_id} not found")
    await db.flush()
    logger.info("Deleted program %s", program_id)
