"""
Recurrence calculator: next firing instant of a daily reminder.

A reminder fires at one wall-clock time on each of its active weekdays, like
a day-of-week cron line with a single daily fire time. No timezone
conversion: the result carries whatever tzinfo `now` carries.

Public API
----------
next_occurrence(time_of_day, active_days, now)  -> datetime
next_occurrence_for(reminder, now)              -> datetime
upcoming(reminders, now, limit)                 -> list[(Reminder, datetime)]
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Iterable, Optional, Protocol

from app.core.errors import EmptyActiveDaysError
from app.domain.reminders import Reminder, Weekday, parse_time_of_day

# One full week after today covers every weekday.
_SCAN_DAYS = 7


class _Schedulable(Protocol):
    time_of_day: str
    active_days: frozenset[Weekday]


def _at(day: datetime, fire_time: time) -> datetime:
    return day.replace(
        hour=fire_time.hour, minute=fire_time.minute, second=0, microsecond=0
    )


def next_occurrence(
    time_of_day: str | time,
    active_days: Iterable[Weekday | str],
    now: datetime,
) -> datetime:
    """
    Return the first instant strictly after `now` at `time_of_day` on an
    active weekday. Raises EmptyActiveDaysError before scanning if
    `active_days` is empty.
    """
    days = frozenset(Weekday(d) for d in active_days)
    if not days:
        raise EmptyActiveDaysError()
    fire_time = time_of_day if isinstance(time_of_day, time) else parse_time_of_day(time_of_day)

    today = _at(now, fire_time)
    if Weekday.from_date(now.date()) in days and today > now:
        return today

    for offset in range(1, _SCAN_DAYS + 1):
        candidate = today + timedelta(days=offset)
        if Weekday.from_date(candidate.date()) in days:
            return candidate

    # unreachable: a non-empty set always matches within 7 days
    raise EmptyActiveDaysError()


def next_occurrence_for(reminder: _Schedulable, now: datetime) -> datetime:
    return next_occurrence(reminder.time_of_day, reminder.active_days, now)


def upcoming(
    reminders: Iterable[Reminder],
    now: datetime,
    limit: Optional[int] = None,
) -> list[tuple[Reminder, datetime]]:
    """Enabled reminders ordered by their next firing instant, soonest first."""
    scheduled = [
        (r, next_occurrence_for(r, now))
        for r in reminders
        if r.enabled and r.active_days
    ]
    scheduled.sort(key=lambda pair: pair[1])
    return scheduled[:limit] if limit is not None else scheduled
