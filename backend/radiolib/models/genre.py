from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from radiolib.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Genre(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "genres"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    recording_links = relationship(
        "RecordingGenre", back_populates="genre", passive_deletes=True, lazy="noload"
    )
