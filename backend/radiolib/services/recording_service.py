"""Recording writes together with their genre and people associations.

Create and update run as one transaction: the recording row, the
``recording_genres`` rows and the ``recording_people`` rows are committed
together or not at all. Relations are never diffed; an update deletes every
association of the recording and inserts the submitted sets again.
"""
import logging
import uuid
from collections import defaultdict

from sqlalchemy import case, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.models.genre import Genre
from radiolib.models.person import Person
from radiolib.models.program import Program
from radiolib.models.recording import PersonRole, Recording, RecordingGenre, RecordingPerson
from radiolib.schemas.recording import (
    GenreRecording,
    PersonRecording,
    RecordingCreated,
    RecordingForm,
    RecordingFormData,
    RecordingListItem,
    RecordingResponse,
)
from radiolib.services.result import ActionResult, ErrorKind

logger = logging.getLogger(__name__)

HOST_GUEST_OVERLAP = "a person cannot be simultaneously host and guest"
DUPLICATE_PERSON = "a person is listed more than once in the same role"
RECORDING_NOT_FOUND = "recording not found"


def has_role_overlap(form: RecordingFormData) -> bool:
    """True when some person id is both a host and a guest."""
    return bool(set(form.hosts) & set(form.guests))


def has_duplicate_person(form: RecordingFormData) -> bool:
    return len(set(form.hosts)) < len(form.hosts) or len(set(form.guests)) < len(form.guests)


def validate_people(form: RecordingFormData) -> str | None:
    if has_role_overlap(form):
        return HOST_GUEST_OVERLAP
    if has_duplicate_person(form):
        return DUPLICATE_PERSON
    return None


def _scalar_values(form: RecordingFormData) -> dict:
    return {
        "program_id": form.program_id,
        "episode_title": form.episode_title,
        "description": form.description or None,
        "type": form.type,
        "release_date": form.release_date,
        "duration": form.duration or None,
        "status": form.status,
        "keywords": form.keywords or None,
        "file_url": form.file_url,
    }


def _error_message(exc: Exception, fallback: str) -> str:
    orig = getattr(exc, "orig", None)
    message = str(orig or exc)
    return message or fallback


async def _insert_relations(db: AsyncSession, recording_id: uuid.UUID, form: RecordingFormData) -> None:
    if form.genre_ids:
        await db.execute(
            insert(RecordingGenre),
            [{"recording_id": recording_id, "genre_id": genre_id} for genre_id in form.genre_ids],
        )
    if form.hosts:
        await db.execute(
            insert(RecordingPerson),
            [{"recording_id": recording_id, "person_id": pid, "role": PersonRole.HOST} for pid in form.hosts],
        )
    if form.guests:
        await db.execute(
            insert(RecordingPerson),
            [{"recording_id": recording_id, "person_id": pid, "role": PersonRole.GUEST} for pid in form.guests],
        )


async def create_recording_with_relations(
    db: AsyncSession, form: RecordingFormData
) -> ActionResult[RecordingCreated]:
    error = validate_people(form)
    if error:
        return ActionResult.fail(error, ErrorKind.VALIDATION)

    try:
        recording = Recording(id=uuid.uuid4(), **_scalar_values(form))
        db.add(recording)
        await db.flush()
        await _insert_relations(db, recording.id, form)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Recording create rolled back: %s", e)
        return ActionResult.fail(_error_message(e, "failed to create recording"))
    except Exception as e:
        await db.rollback()
        logger.error("Unexpected error creating recording: %s", e, exc_info=True)
        return ActionResult.fail(str(e) or "failed to create recording")

    logger.info(
        "Created recording %s with %d genres, %d hosts, %d guests",
        recording.id, len(form.genre_ids), len(form.hosts), len(form.guests),
    )
    return ActionResult.ok(RecordingCreated(id=recording.id))


async def update_recording_with_relations(
    db: AsyncSession, recording_id: uuid.UUID, form: RecordingFormData
) -> ActionResult[None]:
    error = validate_people(form)
    if error:
        return ActionResult.fail(error, ErrorKind.VALIDATION)

    try:
        recording = await db.get(Recording, recording_id)
        if not recording:
            return ActionResult.fail(RECORDING_NOT_FOUND, ErrorKind.NOT_FOUND)

        for key, value in _scalar_values(form).items():
            setattr(recording, key, value)
        await db.flush()

        await db.execute(delete(RecordingGenre).where(RecordingGenre.recording_id == recording_id))
        await db.execute(delete(RecordingPerson).where(RecordingPerson.recording_id == recording_id))
        await _insert_relations(db, recording_id, form)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Recording %s update rolled back: %s", recording_id, e)
        return ActionResult.fail(_error_message(e, "failed to update recording"))
    except Exception as e:
        await db.rollback()
        logger.error("Unexpected error updating recording %s: %s", recording_id, e, exc_info=True)
        return ActionResult.fail(str(e) or "failed to update recording")

    logger.info("Updated recording %s", recording_id)
    return ActionResult.ok()


async def get_recording_for_form(db: AsyncSession, recording_id: uuid.UUID) -> ActionResult[RecordingForm]:
    try:
        result = await db.execute(select(Recording).where(Recording.id == recording_id))
        recording = result.scalar_one_or_none()
        if not recording:
            return ActionResult.fail(RECORDING_NOT_FOUND, ErrorKind.NOT_FOUND)

        genre_rows = await db.execute(
            select(RecordingGenre.genre_id).where(RecordingGenre.recording_id == recording_id)
        )
        people_rows = await db.execute(
            select(RecordingPerson.person_id, RecordingPerson.role).where(
                RecordingPerson.recording_id == recording_id
            )
        )
        people = people_rows.all()
        form = RecordingForm(
            recording=RecordingResponse.model_validate(recording),
            genre_ids=list(genre_rows.scalars().all()),
            hosts=[pid for pid, role in people if role == PersonRole.HOST],
            guests=[pid for pid, role in people if role == PersonRole.GUEST],
        )
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Loading recording %s failed: %s", recording_id, e)
        return ActionResult.fail(_error_message(e, "failed to load recording"))
    except Exception as e:
        await db.rollback()
        logger.error("Unexpected error loading recording %s: %s", recording_id, e, exc_info=True)
        return ActionResult.fail(str(e) or "failed to load recording")

    return ActionResult.ok(form)


async def delete_recording_with_relations(db: AsyncSession, recording_id: uuid.UUID) -> ActionResult[None]:
    # Junction rows go with the recording through ON DELETE CASCADE
    try:
        result = await db.execute(delete(Recording).where(Recording.id == recording_id))
        if result.rowcount == 0:
            return ActionResult.fail(RECORDING_NOT_FOUND, ErrorKind.NOT_FOUND)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Recording %s delete failed: %s", recording_id, e)
        return ActionResult.fail(_error_message(e, "failed to delete recording"))
    except Exception as e:
        await db.rollback()
        logger.error("Unexpected error deleting recording %s: %s", recording_id, e, exc_info=True)
        return ActionResult.fail(str(e) or "failed to delete recording")

    logger.info("Deleted recording %s", recording_id)
    return ActionResult.ok()


async def list_recordings(db: AsyncSession) -> list[RecordingListItem]:
    """All recordings with program name, comma-joined people names and genre ids."""
    result = await db.execute(
        select(Recording, Program.name)
        .outerjoin(Program, Recording.program_id == Program.id)
        .order_by(Recording.release_date.desc())
    )
    rows = result.all()

    people_result = await db.execute(
        select(RecordingPerson.recording_id, Person.name)
        .join(Person, RecordingPerson.person_id == Person.id)
        .order_by(case((RecordingPerson.role == PersonRole.HOST, 0), else_=1), Person.name)
    )
    names_by_recording: dict[uuid.UUID, list[str]] = defaultdict(list)
    for rec_id, name in people_result.all():
        names_by_recording[rec_id].append(name)

    genre_result = await db.execute(select(RecordingGenre.recording_id, RecordingGenre.genre_id))
    genres_by_recording: dict[uuid.UUID, list[uuid.UUID]] = defaultdict(list)
    for rec_id, genre_id in genre_result.all():
        genres_by_recording[rec_id].append(genre_id)

    items = []
    for recording, program_name in rows:
        base = RecordingResponse.model_validate(recording).model_dump()
        items.append(
            RecordingListItem(
                **base,
                program_name=program_name,
                people_names=", ".join(names_by_recording.get(recording.id, [])),
                genre_ids=genres_by_recording.get(recording.id, []),
            )
        )
    return items


async def get_recordings_for_person(db: AsyncSession, person_id: uuid.UUID) -> list[PersonRecording]:
    result = await db.execute(
        select(
            RecordingPerson.recording_id,
            Recording.episode_title,
            Recording.release_date,
            Recording.status,
            RecordingPerson.role,
        )
        .join(Recording, RecordingPerson.recording_id == Recording.id)
        .where(RecordingPerson.person_id == person_id)
        .order_by(Recording.release_date.desc())
    )
    return [
        PersonRecording(
            recording_id=rec_id, episode_title=title, release_date=released, status=status, role=role
        )
        for rec_id, title, released, status, role in result.all()
    ]


async def get_recordings_for_genre(db: AsyncSession, genre_id: uuid.UUID) -> list[GenreRecording]:
    result = await db.execute(
        select(
            RecordingGenre.recording_id,
            Recording.episode_title,
            Recording.release_date,
            Recording.status,
        )
        .join(Recording, RecordingGenre.recording_id == Recording.id)
        .join(Genre, RecordingGenre.genre_id == Genre.id)
        .where(RecordingGenre.genre_id == genre_id)
        .order_by(Recording.release_date.desc())
    )
    return [
        GenreRecording(recording_id=rec_id, episode_title=title, release_date=released, status=status)
        for rec_id, title, released, status in result.all()
    ]
