"""
Reminder entities: a daily wall-clock time plus a set of active weekdays.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import date, time
from typing import Iterable

from app.core.errors import EmptyActiveDaysError, InvalidTimeOfDayError


class ReminderType(str, enum.Enum):
    water = "water"
    meal = "meal"
    eye_rest = "eye_rest"
    stretch = "stretch"
    posture = "posture"
    meditation = "meditation"


class Sound(str, enum.Enum):
    drop = "drop"
    bell = "bell"
    chime = "chime"
    soft = "soft"
    ping = "ping"
    calm = "calm"


class Weekday(str, enum.Enum):
    mon = "mon"
    tue = "tue"
    wed = "wed"
    thu = "thu"
    fri = "fri"
    sat = "sat"
    sun = "sun"

    @classmethod
    def from_date(cls, d: date) -> "Weekday":
        # date.weekday(): Monday == 0
        return _WEEK[d.weekday()]


_WEEK: tuple[Weekday, ...] = tuple(Weekday)
WEEKDAYS = frozenset(_WEEK[:5])
WEEKEND = frozenset(_WEEK[5:])
EVERY_DAY = frozenset(_WEEK)

_DEFAULT_SOUNDS: dict[ReminderType, Sound] = {
    ReminderType.water: Sound.drop,
    ReminderType.meal: Sound.bell,
    ReminderType.eye_rest: Sound.chime,
    ReminderType.stretch: Sound.soft,
    ReminderType.posture: Sound.ping,
    ReminderType.meditation: Sound.calm,
}

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def default_sound_for(reminder_type: ReminderType) -> Sound:
    return _DEFAULT_SOUNDS[ReminderType(reminder_type)]


def parse_time_of_day(value: str) -> time:
    """Parse a 24h "HH:MM" string. Raises InvalidTimeOfDayError."""
    m = _TIME_RE.match(value) if isinstance(value, str) else None
    if not m:
        raise InvalidTimeOfDayError(str(value))
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def normalize_days(days: Iterable[Weekday | str]) -> frozenset[Weekday]:
    """Coerce weekday tags to a non-empty frozenset. Raises EmptyActiveDaysError."""
    result = frozenset(Weekday(d) for d in days)
    if not result:
        raise EmptyActiveDaysError()
    return result


def sorted_days(days: Iterable[Weekday]) -> list[Weekday]:
    return sorted(days, key=_WEEK.index)


def format_days(days: Iterable[Weekday | str]) -> str:
    """Human label: "Every day", "Weekdays", "Weekends", or "Mon, Wed"."""
    day_set = frozenset(Weekday(d) for d in days)
    if day_set == EVERY_DAY:
        return "Every day"
    if day_set == WEEKDAYS:
        return "Weekdays"
    if day_set == WEEKEND:
        return "Weekends"
    return ", ".join(d.value.capitalize() for d in sorted_days(day_set))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReminderSpec:
    """What to remind and when. Shared by template packs and create requests."""
    type: ReminderType
    time_of_day: str
    active_days: frozenset[Weekday]

    def __post_init__(self):
        object.__setattr__(self, "type", ReminderType(self.type))
        parse_time_of_day(self.time_of_day)
        object.__setattr__(self, "active_days", normalize_days(self.active_days))

    @property
    def time(self) -> time:
        return parse_time_of_day(self.time_of_day)


@dataclass(frozen=True)
class ReminderRequest:
    """Payload for the store's create operation."""
    spec: ReminderSpec
    enabled: bool = True
    message: str = ""
    sound: Sound | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "sound",
            Sound(self.sound) if self.sound is not None else default_sound_for(self.spec.type),
        )


@dataclass
class Reminder:
    """A persisted reminder as returned by the store."""
    id: str
    type: ReminderType
    time_of_day: str
    active_days: frozenset[Weekday]
    enabled: bool = True
    message: str = ""
    sound: Sound = Sound.chime

    def __post_init__(self):
        self.type = ReminderType(self.type)
        self.sound = Sound(self.sound)
        self.active_days = frozenset(Weekday(d) for d in self.active_days)

    @property
    def time(self) -> time:
        return parse_time_of_day(self.time_of_day)

    @property
    def days_label(self) -> str:
        return format_days(self.active_days)
