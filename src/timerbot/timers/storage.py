"""JSON file persistence for running timers.

The whole timers file is read on every access and rewritten on every
mutation. There is no locking: a single active writer is assumed, and
overlapping load/save cycles from several processes can lose updates.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from timerbot.timers.models import (
    TimerMap,
    TimerRecord,
    TimerStarted,
    TimerStopped,
    ensure_utc,
    round_half_up,
    timer_map_adapter,
    utc_now,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Module-level singleton
_store: "TimerStore | None" = None


def get_store() -> "TimerStore":
    """Get the singleton TimerStore built from settings.

    Returns:
        TimerStore instance
    """
    global _store
    if _store is None:
        from timerbot.config import settings

        _store = TimerStore(settings.get_timers_path())
    return _store


def format_duration(seconds: int) -> str:
    """Format seconds into a human-readable duration string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1h 23m" or "45m 12s"
    """
    if seconds < 0:
        return "0s"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 and hours == 0:  # Only show seconds if under an hour
        parts.append(f"{secs}s")

    return " ".join(parts) if parts else "0s"


def decode_timers(content: str | bytes) -> TimerMap:
    """Decode the timers file content.

    Any decode failure yields an empty mapping: a corrupt or foreign file
    is treated exactly like a missing one and is never repaired.

    Args:
        content: Raw file content.

    Returns:
        Mapping of task name to timer record, empty on any error.
    """
    try:
        return timer_map_adapter.validate_json(content)
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable timers data ({e.error_count()} errors)")
        return {}


def encode_timers(timers: TimerMap) -> bytes:
    """Encode timers as indented JSON."""
    return timer_map_adapter.dump_json(timers, by_alias=True, indent=2)


class TimerStore:
    """JSON file-based storage for running timers.

    Example:
        store = TimerStore("/path/to/timers.json")
        store.start_timer("build")
        result = store.stop_timer("build")
    """

    def __init__(self, path: str | Path, clock: Clock = utc_now) -> None:
        """Initialize the timer store.

        Args:
            path: Path to the JSON storage file.
            clock: Callable returning the current UTC time.
        """
        self._path = Path(path)
        self._clock = clock

    @property
    def path(self) -> Path:
        """Get the storage file path."""
        return self._path

    def load(self) -> TimerMap:
        """Load all running timers.

        Returns:
            Mapping of task name to timer record. Empty when the file is
            missing, unreadable or not a valid timers mapping.
        """
        try:
            content = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Could not read timers file {self._path}: {e}")
            return {}

        timers = decode_timers(content)
        logger.debug(f"Loaded {len(timers)} timers from {self._path}")
        return timers

    def save(self, timers: TimerMap) -> None:
        """Replace the stored timers.

        The content is written to a temporary file next to the target and
        then moved into place, so readers never see a partial file.

        Args:
            timers: Complete mapping to persist.

        Raises:
            OSError: If the directory cannot be created or the file written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_bytes(encode_timers(timers))
            tmp_path.replace(self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(timers)} timers to {self._path}")

    def start_timer(self, task: str) -> TimerStarted:
        """Start a timer, overwriting any running timer for the same task.

        Args:
            task: Name of the task to time.

        Returns:
            The task name and start time used.

        Raises:
            ValueError: If the task name is not a non-empty string.
        """
        _check_task(task)
        timers = self.load()
        now = ensure_utc(self._clock())

        if task in timers:
            logger.info(f"Restarting timer for '{task}'")
        timers[task] = TimerRecord(started_at=now)
        self.save(timers)

        logger.info(f"Started timer for '{task}'")
        return TimerStarted(task=task, started_at=now)

    def stop_timer(self, task: str) -> TimerStopped | None:
        """Stop a running timer and remove it from the store.

        Args:
            task: Name of the task to stop.

        Returns:
            The timing result, or None if no timer is running for the task.
            Nothing is written in that case.

        Raises:
            ValueError: If the task name is not a non-empty string.
        """
        _check_task(task)
        timers = self.load()

        record = timers.pop(task, None)
        if record is None:
            logger.info(f"No running timer for '{task}'")
            return None

        stopped_at = ensure_utc(self._clock())
        elapsed = round_half_up((stopped_at - record.started_at).total_seconds())
        self.save(timers)

        logger.info(f"Stopped timer for '{task}' after {elapsed}s")
        return TimerStopped(
            task=task,
            started_at=record.started_at,
            stopped_at=stopped_at,
            elapsed_seconds=elapsed,
        )

    def get_status(self) -> list[dict]:
        """Get all running timers with their elapsed time so far.

        Returns:
            List of dictionaries sorted by start time, oldest first.
        """
        now = ensure_utc(self._clock())
        timers = sorted(self.load().items(), key=lambda item: item[1].started_at)
        return [
            {
                "task": task,
                "started_at": record.started_at,
                "elapsed_seconds": round_half_up((now - record.started_at).total_seconds()),
            }
            for task, record in timers
        ]


def _check_task(task: str) -> None:
    if not isinstance(task, str):
        raise ValueError(f"Task name must be a string, not {type(task).__name__}")
    if not task:
        raise ValueError("Task name must not be empty")
