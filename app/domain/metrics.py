"""
Metric entities shared by the aggregator, score engine and insight selector.

A MetricEntry is one logged observation for one metric kind. Entries are
immutable and owned by the store; the core only reads and aggregates them.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from app.core.errors import InvalidInputError


class MetricKind(str, enum.Enum):
    mood = "mood"
    sleep = "sleep"
    hydration = "hydration"
    work = "work"


class Mood(str, enum.Enum):
    angry = "angry"
    sad = "sad"
    anxious = "anxious"
    neutral = "neutral"
    happy = "happy"


_MOOD_VALUES: dict[Mood, int] = {
    Mood.angry: 1,
    Mood.sad: 2,
    Mood.anxious: 3,
    Mood.neutral: 4,
    Mood.happy: 5,
}
_MOODS_BY_VALUE: dict[int, Mood] = {v: k for k, v in _MOOD_VALUES.items()}

# 1 glass = 250 ml
GLASS_LITERS = 0.25


def mood_value(mood: Mood) -> int:
    return _MOOD_VALUES[Mood(mood)]


def mood_from_value(value: int) -> Mood:
    """Inverse of mood_value for the 1–5 check-in slider."""
    try:
        return _MOODS_BY_VALUE[int(value)]
    except (KeyError, TypeError, ValueError):
        raise InvalidInputError(
            message=f"Mood value must be an integer 1–5, got {value!r}.",
            details={"value": value},
        ) from None


def glasses_to_liters(glasses: float) -> float:
    return glasses * GLASS_LITERS


def _as_day(value: date | datetime | str) -> date:
    """Accept a date, datetime or ISO-8601 string; time-of-day is discarded."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise InvalidInputError(
        message=f"Invalid entry date {value!r}.",
        details={"date": str(value)},
    )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricEntry:
    kind: MetricKind
    day: date
    mood: Optional[Mood] = None
    hours: Optional[float] = None
    glasses: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", MetricKind(self.kind))
        object.__setattr__(self, "day", _as_day(self.day))

        if self.kind is MetricKind.mood:
            if self.mood is None:
                raise InvalidInputError("A mood entry requires a mood value.")
            object.__setattr__(self, "mood", Mood(self.mood))
        elif self.kind in (MetricKind.sleep, MetricKind.work):
            if self.hours is None or not math.isfinite(self.hours) or self.hours < 0:
                raise InvalidInputError(
                    f"A {self.kind.value} entry requires finite, non-negative hours.",
                    details={"hours": self.hours},
                )
        elif self.kind is MetricKind.hydration:
            if (
                self.glasses is None
                or not math.isfinite(self.glasses)
                or self.glasses < 0
                or int(self.glasses) != self.glasses
            ):
                raise InvalidInputError(
                    "A hydration entry requires a non-negative whole glass count.",
                    details={"glasses": self.glasses},
                )
            object.__setattr__(self, "glasses", int(self.glasses))

    @property
    def value(self) -> float:
        """Numeric value averaged by the aggregator."""
        if self.kind is MetricKind.mood:
            return float(mood_value(self.mood))
        if self.kind is MetricKind.hydration:
            return float(self.glasses)
        return float(self.hours)

    @classmethod
    def from_record(cls, kind: MetricKind | str, record: Mapping[str, Any]) -> "MetricEntry":
        """Build from a deserialized store record `{date, mood?, hours?, glasses?}`."""
        if "date" not in record:
            raise InvalidInputError("Metric record is missing 'date'.", details={"record": dict(record)})
        kind = MetricKind(kind)
        try:
            return cls(
                kind=kind,
                day=record["date"],
                mood=record.get("mood") if kind is MetricKind.mood else None,
                hours=record.get("hours") if kind in (MetricKind.sleep, MetricKind.work) else None,
                glasses=record.get("glasses") if kind is MetricKind.hydration else None,
            )
        except ValueError as exc:
            # unknown enum label
            raise InvalidInputError(str(exc), details={"record": dict(record)}) from exc


@dataclass(frozen=True)
class MetricSummary:
    average: float
    sample_count: int

    @property
    def has_data(self) -> bool:
        # sample_count == 0 means "no data", not "average 0"
        return self.sample_count > 0


EMPTY_SUMMARY = MetricSummary(average=0.0, sample_count=0)


# ---------------------------------------------------------------------------
# Work-life balance
# ---------------------------------------------------------------------------

class BalanceCategory(str, enum.Enum):
    work = "work"
    family = "family"
    personal = "personal"
    learning = "learning"
    social = "social"
    rest = "rest"


@dataclass(frozen=True)
class TimeAllocation:
    """Weekly hours spent on one life category against the user's target."""
    category: BalanceCategory
    hours: float
    target: float

    def __post_init__(self):
        object.__setattr__(self, "category", BalanceCategory(self.category))
        for name in ("hours", "target"):
            v = getattr(self, name)
            if v is None or not math.isfinite(v) or v < 0:
                raise InvalidInputError(
                    f"Time allocation {name} must be a finite, non-negative number of hours.",
                    details={"category": self.category.value, name: v},
                )
