"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Enums
    user_role = postgresql.ENUM("admin", "user", name="user_role", create_type=False)
    recording_type = postgresql.ENUM("live", "podcast", name="recording_type", create_type=False)
    recording_status = postgresql.ENUM("published", "hidden", name="recording_status", create_type=False)
    person_role = postgresql.ENUM("host", "guest", name="person_role", create_type=False)
    for enum_type in (user_role, recording_type, recording_status, person_role):
        enum_type.create(op.get_bind(), checkfirst=True)

    # Users
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(255), unique=True, index=True, nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("display_name", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "user_preferences",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column("filter_state", postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )

    # Catalogue
    op.create_table(
        "people",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("telegram_account", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "programs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "host_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("people.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("slug", sa.String(32), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_programs_slug", "programs", ["slug"])

    op.create_table(
        "genres",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "recordings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("program_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("programs.id"), nullable=False),
        sa.Column("episode_title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", recording_type, nullable=False, server_default="live"),
        sa.Column("release_date", sa.Date(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("status", recording_status, nullable=False, server_default="published"),
        sa.Column("keywords", sa.Text(), nullable=True),
        sa.Column("file_url", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_recordings_program_id", "recordings", ["program_id"])

    # Junction tables
    op.create_table(
        "recording_genres",
        sa.Column(
            "recording_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("recordings.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "genre_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("genres.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "recording_people",
        sa.Column(
            "recording_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("recordings.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "person_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("people.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("role", person_role, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("recording_people")
    op.drop_table("recording_genres")
    op.drop_index("ix_recordings_program_id")
    op.drop_table("recordings")
    op.drop_table("genres")
    op.drop_index("ix_programs_slug")
    op.drop_table("programs")
    op.drop_table("people")
    op.drop_table("user_preferences")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS person_role")
    op.execute("DROP TYPE IF EXISTS recording_status")
    op.execute("DROP TYPE IF EXISTS recording_type")
    op.execute("DROP TYPE IF EXISTS user_role")
