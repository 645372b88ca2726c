"""Data models for timers.

Defines the persisted timer record, the results returned by the start
and stop operations, and the timestamp helpers shared by both.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

# Extended ISO-8601 date-time, optional fraction and offset
_ISO_TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?")


def utc_now() -> datetime:
    """Get the current UTC time truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def ensure_utc(value: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with a ``Z`` suffix.

    Milliseconds are included only when the sub-second part is non-zero.

    Args:
        value: Datetime to format.

    Returns:
        String like "2024-01-01T00:00:00Z" or "2024-01-01T00:00:00.250Z".
    """
    value = ensure_utc(value).replace(tzinfo=None)
    timespec = "milliseconds" if value.microsecond else "seconds"
    return value.isoformat(timespec=timespec) + "Z"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


class TimerRecord(BaseModel):
    """A running timer as stored on disk.

    Attributes:
        started_at: When the timer was started (UTC).
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    started_at: datetime = Field(alias="startedAt", description="When the timer was started")

    @field_validator("started_at", mode="before")
    @classmethod
    def require_timestamp(cls, value: Any) -> Any:
        # Numbers and numeric strings would otherwise parse as unix timestamps
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not _ISO_TIMESTAMP.fullmatch(value):
            raise ValueError("startedAt must be an ISO-8601 timestamp")
        return value

    @field_validator("started_at")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_serializer("started_at")
    def serialize_started_at(self, value: datetime) -> str:
        return format_timestamp(value)


# Shape of the whole timers file: task name -> record
TimerMap = dict[str, TimerRecord]
timer_map_adapter: TypeAdapter[TimerMap] = TypeAdapter(TimerMap)


class TimerStarted(BaseModel):
    """Result of starting a timer."""

    task: str
    started_at: datetime


class TimerStopped(BaseModel):
    """Result of stopping a timer.

    Serializes with camelCase keys in the order task, startedAt,
    stoppedAt, elapsedSeconds.

    Attributes:
        task: Name of the stopped task.
        started_at: When the timer was started.
        stopped_at: When the timer was stopped.
        elapsed_seconds: Rounded whole seconds between start and stop.
            Negative if the clock moved backwards.
    """

    model_config = ConfigDict(populate_by_name=True)

    task: str
    started_at: datetime = Field(alias="startedAt")
    stopped_at: datetime = Field(alias="stoppedAt")
    elapsed_seconds: int = Field(alias="elapsedSeconds")

    @field_serializer("started_at", "stopped_at")
    def serialize_timestamps(self, value: datetime) -> str:
        return format_timestamp(value)

    def to_json(self) -> str:
        """Serialize as indented JSON text with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=2)
