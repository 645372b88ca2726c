"""Tasks exposed by timerbot.

Example:
    from timerbot.tasks import create_default_registry

    registry = create_default_registry()
    result = await registry.execute("start_timer", task="build")
"""

from timerbot.tasks.base import Task, TaskDefinition, TaskParameter, TaskResult
from timerbot.tasks.registry import TaskRegistry
from timerbot.tasks.timers import StartTimerTask, StopTimerTask, register_timer_tasks
from timerbot.timers import TimerStore

__all__ = [
    "Task",
    "TaskParameter",
    "TaskDefinition",
    "TaskResult",
    "TaskRegistry",
    "StartTimerTask",
    "StopTimerTask",
    "create_default_registry",
]


def create_default_registry(store: TimerStore | None = None) -> TaskRegistry:
    """Create a new task registry with all default tasks registered.

    Args:
        store: Timer store to use (default: the configured store).

    Returns:
        TaskRegistry with all default tasks.
    """
    registry = TaskRegistry()
    register_timer_tasks(registry, store)
    return registry
