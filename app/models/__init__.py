from .metric_entry import MetricEntryRow
from .reminder import ReminderRow

__all__ = [
    "MetricEntryRow",
    "ReminderRow",
]
