"""Registry of executable tasks."""

import inspect
import logging
from typing import Any

from timerbot.tasks.base import Task, TaskResult

logger = logging.getLogger(__name__)


class TaskRegistry:
    """Registry that looks up tasks by name and executes them.

    Execution never raises: unknown tasks, bad arguments and exceptions
    from the task itself all come back as an unsuccessful TaskResult.

    Example:
        registry = TaskRegistry()
        registry.register(StartTimerTask())
        result = await registry.execute("start_timer", task="build")
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def register(self, task: Task) -> None:
        """Register a task, replacing any task with the same name.

        Args:
            task: Task instance to register.
        """
        if task.name in self._tasks:
            logger.warning(f"Replacing already registered task: {task.name}")
        self._tasks[task.name] = task
        logger.debug(f"Registered task: {task.name}")

    def get(self, name: str) -> Task | None:
        """Get a task by name."""
        return self._tasks.get(name)

    def list_tasks(self) -> list[Task]:
        """Get all registered tasks in registration order."""
        return list(self._tasks.values())

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Get tool schemas for all registered tasks."""
        return [task.to_tool_schema() for task in self._tasks.values()]

    async def execute(self, name: str, **kwargs: Any) -> TaskResult:
        """Execute a task by name.

        Args:
            name: Name of the task to execute.
            **kwargs: Task parameters.

        Returns:
            The task's result. A task may return a TaskResult itself to
            report a handled failure; any other return value becomes the
            output of a successful result.
        """
        task = self._tasks.get(name)
        if task is None:
            return TaskResult(success=False, error=f"Unknown task: {name}")

        try:
            inspect.signature(task.execute).bind(**kwargs)
        except TypeError as e:
            return TaskResult(success=False, error=f"Invalid arguments for {name}: {e}")

        try:
            output = await task.execute(**kwargs)
        except ValueError as e:
            logger.info(f"Task {name} rejected its arguments: {e}")
            return TaskResult(success=False, error=str(e))
        except Exception as e:
            logger.exception(f"Task {name} failed")
            return TaskResult(success=False, error=f"{type(e).__name__}: {e}")

        if isinstance(output, TaskResult):
            return output
        return TaskResult(success=True, output=output)
