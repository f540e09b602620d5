"""
Reminder — a recurring notification: wall-clock time + active weekdays.

`days` is stored as a comma-separated list of weekday tags ("mon,wed,fri")
so the table stays portable between Postgres and SQLite.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Boolean, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.reminders import ReminderType, Sound


def _new_id() -> str:
    return uuid.uuid4().hex


class ReminderRow(Base):
    __tablename__ = "reminders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    type: Mapped[str] = mapped_column(
        Enum(ReminderType, name="reminder_type_enum"), nullable=False, index=True
    )
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    days: Mapped[str] = mapped_column(String(32), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    message: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    sound: Mapped[str] = mapped_column(
        Enum(Sound, name="sound_enum"), nullable=False, default=Sound.chime
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
