"""Tasks: Timers

Start and stop named timers whose state is persisted between calls.
"""

from timerbot.tasks.base import Task, TaskResult
from timerbot.timers import TimerStore, format_timestamp, get_store


class StartTimerTask(Task):
    """Start a timer for a named task.

    Example:
        task = StartTimerTask()
        result = await task.execute(task="build")
        # Returns: 'Timer started for "build" at 2024-01-01T00:00:00Z.'
    """

    def __init__(self, store: TimerStore | None = None) -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "start_timer"

    @property
    def description(self) -> str:
        return "Start a timer for a named task. Saves the start time to disk."

    async def execute(self, task: str) -> str:
        """Start (or restart) the timer for a task.

        Args:
            task: Name of the task to time

        Returns:
            Confirmation with the task name and start time.
        """
        store = self._store or get_store()
        started = store.start_timer(task)
        return f'Timer started for "{task}" at {format_timestamp(started.started_at)}.'


class StopTimerTask(Task):
    """Stop a running timer and report the elapsed time."""

    def __init__(self, store: TimerStore | None = None) -> None:
        self._store = store

    @property
    def name(self) -> str:
        return "stop_timer"

    @property
    def description(self) -> str:
        return "Stop a running timer and return the elapsed time in seconds."

    async def execute(self, task: str) -> str | TaskResult:
        """Stop the timer for a task.

        Args:
            task: Name of the task to stop timing

        Returns:
            JSON text with task, startedAt, stoppedAt and elapsedSeconds,
            or an unsuccessful result if no timer is running for the task.
        """
        store = self._store or get_store()
        stopped = store.stop_timer(task)
        if stopped is None:
            return TaskResult(success=False, error=f'No running timer found for "{task}".')
        return stopped.to_json()


def register_timer_tasks(registry, store: TimerStore | None = None) -> None:
    """Register the timer tasks with a registry.

    Args:
        registry: TaskRegistry to register tasks with.
        store: Store to use instead of the configured default.
    """
    registry.register(StartTimerTask(store))
    registry.register(StopTimerTask(store))
