"""Base classes for tasks.

A task is a named, described operation with an async ``execute`` method.
Its parameters are read from the ``execute`` signature and the ``Args:``
section of its docstring, so tasks never declare schemas by hand.
"""

import inspect
import re
import types
import typing
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel, Field

# Python annotation -> JSON schema type
_JSON_TYPES: dict[Any, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}

_ARG_LINE = re.compile(r"^ {4}(\w+)(?:\s*\([^)]*\))?:\s*(.+)$")


class TaskParameter(BaseModel):
    """A single parameter accepted by a task."""

    name: str = Field(description="Parameter name")
    type: str = Field(default="string", description="JSON schema type")
    description: str = Field(default="", description="Human-readable description")
    required: bool = Field(default=True, description="Whether the parameter must be given")


class TaskDefinition(BaseModel):
    """Name, description and parameters of a task."""

    name: str
    description: str
    parameters: list[TaskParameter] = Field(default_factory=list)

    def input_schema(self) -> dict[str, Any]:
        """Build a JSON schema object for the task's parameters."""
        properties = {
            p.name: {"type": p.type, "description": p.description} for p in self.parameters
        }
        return {
            "type": "object",
            "properties": properties,
            "required": [p.name for p in self.parameters if p.required],
            "additionalProperties": False,
        }


class TaskResult(BaseModel):
    """Outcome of executing a task.

    Attributes:
        success: Whether the task completed successfully.
        output: Task output when successful.
        error: Error message when unsuccessful.
    """

    success: bool
    output: Any = None
    error: str | None = None


def _json_type(annotation: Any) -> str:
    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return _json_type(args[0]) if args else "string"
    return _JSON_TYPES.get(origin or annotation, "string")


def _docstring_args(func: Callable[..., Any]) -> dict[str, str]:
    """Parse the ``Args:`` section of a Google-style docstring."""
    doc = inspect.getdoc(func) or ""
    descriptions: dict[str, str] = {}
    in_args = False
    for line in doc.splitlines():
        stripped = line.strip()
        if stripped == "Args:":
            in_args = True
            continue
        if in_args:
            if stripped and not line.startswith(" "):
                break
            match = _ARG_LINE.match(line)
            if match:
                descriptions[match.group(1)] = match.group(2).strip()
    return descriptions


class Task(ABC):
    """Base class for all tasks.

    Subclasses provide ``name``, ``description`` and ``execute``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique task name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What the task does."""

    @abstractmethod
    async def execute(self, **kwargs: Any) -> Any:
        """Run the task."""

    def get_parameters(self) -> list[TaskParameter]:
        """Get the parameters accepted by ``execute``."""
        signature = inspect.signature(self.execute)
        hints = typing.get_type_hints(self.execute)
        descriptions = _docstring_args(self.execute)

        params = []
        for param in signature.parameters.values():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            params.append(
                TaskParameter(
                    name=param.name,
                    type=_json_type(hints.get(param.name, str)),
                    description=descriptions.get(param.name, ""),
                    required=param.default is inspect.Parameter.empty,
                )
            )
        return params

    def get_definition(self) -> TaskDefinition:
        """Get the full task definition."""
        return TaskDefinition(
            name=self.name,
            description=self.description,
            parameters=self.get_parameters(),
        )

    def to_tool_schema(self) -> dict[str, Any]:
        """Get a tool schema for this task."""
        definition = self.get_definition()
        return {
            "name": definition.name,
            "description": definition.description,
            "input_schema": definition.input_schema(),
        }
