"""
MetricEntry — one logged wellness observation.

Append-only from the core's point of view. Exactly one value column is set,
depending on `kind`:
  mood       → mood      (angry | sad | anxious | neutral | happy)
  sleep      → hours
  work       → hours
  hydration  → glasses
"""
from datetime import datetime, date
from sqlalchemy import Integer, String, Float, DateTime, Date, Enum, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.domain.metrics import MetricKind, Mood


class MetricEntryRow(Base):
    __tablename__ = "metric_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    kind: Mapped[str] = mapped_column(
        Enum(MetricKind, name="metric_kind_enum"), nullable=False, index=True
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    mood: Mapped[str | None] = mapped_column(Enum(Mood, name="mood_enum"), nullable=True)
    hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    glasses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    note: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
