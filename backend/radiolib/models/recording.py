import enum
import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ENUM, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from radiolib.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class RecordingType(str, enum.Enum):
    LIVE = "live"
    PODCAST = "podcast"


class RecordingStatus(str, enum.Enum):
    PUBLISHED = "published"
    HIDDEN = "hidden"


class PersonRole(str, enum.Enum):
    HOST = "host"
    GUEST = "guest"


class Recording(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "recordings"

    program_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("programs.id"), nullable=False, index=True
    )
    episode_title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[RecordingType] = mapped_column(
        ENUM(RecordingType, name="recording_type", create_type=True, values_callable=_enum_values),
        default=RecordingType.LIVE,
        nullable=False,
    )
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    status: Mapped[RecordingStatus] = mapped_column(
        ENUM(RecordingStatus, name="recording_status", create_type=True, values_callable=_enum_values),
        default=RecordingStatus.PUBLISHED,
        nullable=False,
    )
    keywords: Mapped[str | None] = mapped_column(Text, nullable=True)  # comma-separated
    file_url: Mapped[str] = mapped_column(Text, nullable=False)

    program = relationship("Program", back_populates="recordings", lazy="noload")
    genre_links = relationship(
        "RecordingGenre", back_populates="recording", passive_deletes=True, lazy="noload"
    )
    people_links = relationship(
        "RecordingPerson", back_populates="recording", passive_deletes=True, lazy="noload"
    )


class RecordingGenre(Base):
    __tablename__ = "recording_genres"

    recording_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("recordings.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True
    )

    recording = relationship("Recording", back_populates="genre_links", lazy="noload")
    genre = relationship("Genre", back_populates="recording_links", lazy="noload")


class RecordingPerson(Base):
    __tablename__ = "recording_people"

    recording_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("recordings.id", ondelete="CASCADE"), primary_key=True
    )
    # One row per (recording, person): a person is either host or guest, never both
    person_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("people.id", ondelete="CASCADE"), primary_key=True
    )
    role: Mapped[PersonRole] = mapped_column(
        ENUM(PersonRole, name="person_role", create_type=True, values_callable=_enum_values),
        nullable=False,
    )

    recording = relationship("Recording", back_populates="people_links", lazy="noload")
    person = relationship("Person", back_populates="recording_links", lazy="noload")
