"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_METRIC_KINDS = ("mood", "sleep", "hydration", "work")
_MOODS = ("angry", "sad", "anxious", "neutral", "happy")
_REMINDER_TYPES = ("water", "meal", "eye_rest", "stretch", "posture", "meditation")
_SOUNDS = ("drop", "bell", "chime", "soft", "ping", "calm")


def upgrade() -> None:
    # --- ENUM types ---
    for values, name in (
        (_METRIC_KINDS, "metric_kind_enum"),
        (_MOODS, "mood_enum"),
        (_REMINDER_TYPES, "reminder_type_enum"),
        (_SOUNDS, "sound_enum"),
    ):
        sa.Enum(*values, name=name).create(op.get_bind(), checkfirst=True)

    # --- metric_entries ---
    op.create_table(
        "metric_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.Enum(*_METRIC_KINDS, name="metric_kind_enum", create_type=False), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("mood", sa.Enum(*_MOODS, name="mood_enum", create_type=False), nullable=True),
        sa.Column("hours", sa.Float(), nullable=True),
        sa.Column("glasses", sa.Integer(), nullable=True),
        sa.Column("note", sa.String(512), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_metric_entries_id", "metric_entries", ["id"])
    op.create_index("ix_metric_entries_kind", "metric_entries", ["kind"])
    op.create_index("ix_metric_entries_day", "metric_entries", ["day"])

    # --- reminders ---
    op.create_table(
        "reminders",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("type", sa.Enum(*_REMINDER_TYPES, name="reminder_type_enum", create_type=False), nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("days", sa.String(32), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("message", sa.String(512), nullable=False, server_default=""),
        sa.Column("sound", sa.Enum(*_SOUNDS, name="sound_enum", create_type=False), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reminders_type", "reminders", ["type"])


def downgrade() -> None:
    op.drop_table("reminders")
    op.drop_table("metric_entries")

    op.execute("DROP TYPE IF EXISTS sound_enum")
    op.execute("DROP TYPE IF EXISTS reminder_type_enum")
    op.execute("DROP TYPE IF EXISTS mood_enum")
    op.execute("DROP TYPE IF EXISTS metric_kind_enum")
