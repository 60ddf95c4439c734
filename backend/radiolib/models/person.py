from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from radiolib.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Person(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "people"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Stored without the leading "@"
    telegram_account: Mapped[str | None] = mapped_column(String(255), nullable=True)

    hosted_programs = relationship("Program", back_populates="host", passive_deletes=True, lazy="noload")
    recording_links = relationship(
        "RecordingPerson", back_populates="person", passive_deletes=True, lazy="noload"
    )
