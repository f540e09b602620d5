from .metrics import (
    GLASS_LITERS,
    BalanceCategory,
    MetricEntry,
    MetricKind,
    MetricSummary,
    Mood,
    TimeAllocation,
    glasses_to_liters,
    mood_from_value,
    mood_value,
)
from .reminders import (
    Reminder,
    ReminderRequest,
    ReminderSpec,
    ReminderType,
    Sound,
    Weekday,
    default_sound_for,
    format_days,
    parse_time_of_day,
)

__all__ = [
    "GLASS_LITERS",
    "BalanceCategory",
    "MetricEntry",
    "MetricKind",
    "MetricSummary",
    "Mood",
    "TimeAllocation",
    "glasses_to_liters",
    "mood_from_value",
    "mood_value",
    "Reminder",
    "ReminderRequest",
    "ReminderSpec",
    "ReminderType",
    "Sound",
    "Weekday",
    "default_sound_for",
    "format_days",
    "parse_time_of_day",
]
