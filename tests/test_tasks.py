"""Tests for the task registry and timer tasks."""

import json

import pytest

from timerbot.tasks import (
    StartTimerTask,
    StopTimerTask,
    Task,
    TaskParameter,
    TaskRegistry,
    TaskResult,
    create_default_registry,
)
from timerbot.timers import TimerStore


class EchoTask(Task):
    """Task used to exercise the registry."""

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo a message back."

    async def execute(self, message: str, times: int = 1, loud: bool | None = None) -> str:
        """Echo the message.

        Args:
            message: Text to echo
            times: How many times to repeat it
            loud (bool): Upper-case the result

        Returns:
            The echoed text.
        """
        text = " ".join([message] * times)
        return text.upper() if loud else text


class BrokenTask(EchoTask):
    @property
    def name(self) -> str:
        return "broken"

    async def execute(self) -> str:
        raise RuntimeError("disk on fire")


class TestTaskParameters:
    """Tests for parameter discovery from execute()."""

    def test_parameters_from_signature_and_docstring(self):
        params = EchoTask().get_parameters()

        assert params == [
            TaskParameter(name="message", type="string", description="Text to echo", required=True),
            TaskParameter(
                name="times", type="integer", description="How many times to repeat it", required=False
            ),
            TaskParameter(name="loud", type="boolean", description="Upper-case the result", required=False),
        ]

    def test_timer_task_parameters(self):
        params = StartTimerTask().get_parameters()

        assert params == [
            TaskParameter(name="task", type="string", description="Name of the task to time", required=True)
        ]
        assert StopTimerTask().get_parameters()[0].description == "Name of the task to stop timing"

    def test_input_schema(self):
        schema = StartTimerTask().get_definition().input_schema()

        assert schema == {
            "type": "object",
            "properties": {"task": {"type": "string", "description": "Name of the task to time"}},
            "required": ["task"],
            "additionalProperties": False,
        }

    def test_tool_schema(self):
        schema = StopTimerTask().to_tool_schema()

        assert schema["name"] == "stop_timer"
        assert schema["description"] == "Stop a running timer and return the elapsed time in seconds."
        assert schema["input_schema"]["required"] == ["task"]


class TestTaskRegistry:
    """Tests for TaskRegistry."""

    @pytest.fixture
    def registry(self) -> TaskRegistry:
        registry = TaskRegistry()
        registry.register(EchoTask())
        registry.register(BrokenTask())
        return registry

    def test_lookup(self, registry):
        assert len(registry) == 2
        assert "echo" in registry
        assert registry.get("echo").name == "echo"
        assert registry.get("missing") is None
        assert [t.name for t in registry.list_tasks()] == ["echo", "broken"]

    @pytest.mark.asyncio
    async def test_execute_success(self, registry):
        result = await registry.execute("echo", message="hi", times=2)

        assert result == TaskResult(success=True, output="hi hi")

    @pytest.mark.asyncio
    async def test_unknown_task(self, registry):
        result = await registry.execute("nope")

        assert not result.success
        assert result.error == "Unknown task: nope"

    @pytest.mark.asyncio
    async def test_missing_argument(self, registry):
        result = await registry.execute("echo")

        assert not result.success
        assert result.error.startswith("Invalid arguments for echo")

    @pytest.mark.asyncio
    async def test_unexpected_argument(self, registry):
        result = await registry.execute("echo", message="hi", colour="red")

        assert not result.success
        assert result.error.startswith("Invalid arguments for echo")

    @pytest.mark.asyncio
    async def test_exception_becomes_failed_result(self, registry):
        result = await registry.execute("broken")

        assert not result.success
        assert result.error == "RuntimeError: disk on fire"

    def test_register_replaces(self, registry):
        replacement = EchoTask()
        registry.register(replacement)

        assert len(registry) == 2
        assert registry.get("echo") is replacement

    def test_default_registry(self, store):
        registry = create_default_registry(store)

        assert sorted(t.name for t in registry.list_tasks()) == ["start_timer", "stop_timer"]


class TestTimerTasks:
    """Tests for start_timer and stop_timer through the registry."""

    @pytest.fixture
    def registry(self, store) -> TaskRegistry:
        return create_default_registry(store)

    @pytest.mark.asyncio
    async def test_start_confirmation(self, registry):
        result = await registry.execute("start_timer", task="build")

        assert result.success
        assert result.output == 'Timer started for "build" at 2024-01-01T00:00:00Z.'

    @pytest.mark.asyncio
    async def test_start_then_stop(self, registry, clock):
        await registry.execute("start_timer", task="build")
        clock.advance(10)

        result = await registry.execute("stop_timer", task="build")

        assert result.success
        assert json.loads(result.output) == {
            "task": "build",
            "startedAt": "2024-01-01T00:00:00Z",
            "stoppedAt": "2024-01-01T00:00:10Z",
            "elapsedSeconds": 10,
        }
        assert result.output.startswith('{\n  "task": "build",')

    @pytest.mark.asyncio
    async def test_stop_unknown(self, registry, store):
        result = await registry.execute("stop_timer", task="unknown")

        assert not result.success
        assert result.error == 'No running timer found for "unknown".'
        assert store.load() == {}
        assert not store.path.exists()

    @pytest.mark.asyncio
    async def test_stop_twice(self, registry):
        await registry.execute("start_timer", task="build")

        first = await registry.execute("stop_timer", task="build")
        second = await registry.execute("stop_timer", task="build")

        assert first.success
        assert not second.success

    @pytest.mark.asyncio
    async def test_empty_task_name(self, registry, store):
        result = await registry.execute("start_timer", task="")

        assert not result.success
        assert "must not be empty" in result.error
        assert not store.path.exists()

    @pytest.mark.asyncio
    async def test_non_string_task_name(self, registry, store):
        result = await registry.execute("start_timer", task=123)

        assert not result.success
        assert "must be a string" in result.error
        assert not store.path.exists()

        stopped = await registry.execute("stop_timer", task=123)
        assert not stopped.success
        assert "must be a string" in stopped.error

    @pytest.mark.asyncio
    async def test_unusual_task_names_accepted(self, registry):
        name = 'deploy "prod" / 🚀'
        await registry.execute("start_timer", task=name)

        result = await registry.execute("stop_timer", task=name)

        assert json.loads(result.output)["task"] == name

    @pytest.mark.asyncio
    async def test_storage_fault_is_failed_result(self, tmp_path, clock):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        registry = create_default_registry(TimerStore(blocker / "timers.json", clock=clock))

        result = await registry.execute("start_timer", task="build")

        assert not result.success
        assert result.error
