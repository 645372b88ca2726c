"""Timer storage for timerbot.

Provides the persistent store of running timers and its data models.
"""

from timerbot.timers.models import TimerRecord, TimerStarted, TimerStopped, format_timestamp
from timerbot.timers.storage import TimerStore, format_duration, get_store

__all__ = [
    "TimerStore",
    "TimerRecord",
    "TimerStarted",
    "TimerStopped",
    "format_timestamp",
    "format_duration",
    "get_store",
]
