"""MCP server exposing registered tasks as tools.

Each task in the registry becomes an MCP tool whose input schema is
derived from the task's parameters. The server talks MCP over stdio.
"""

import json
import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from timerbot import __version__
from timerbot.config import settings
from timerbot.tasks import TaskRegistry, TaskResult, create_default_registry

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """A tool call completed but reported failure.

    The MCP server turns this into a result flagged with ``isError``
    rather than a protocol error, so the client sees the message.
    """


def format_output(result: TaskResult) -> str:
    """Format a successful task result as text."""
    if isinstance(result.output, (dict, list)):
        return json.dumps(result.output, indent=2)
    return str(result.output)


class TimerServer:
    """MCP server for the timer tasks.

    Example:
        server = TimerServer()
        await server.run()  # serve over stdin/stdout until EOF
    """

    def __init__(
        self,
        registry: TaskRegistry | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            registry: Tasks to expose (default: all default tasks).
            name: Server name reported to clients (default: from settings).
        """
        self._registry = registry if registry is not None else create_default_registry()
        self._server = Server(name or settings.server_name, version=__version__)
        self._server.list_tools()(self.list_tools)
        self._server.call_tool()(self.call_tool)

    @property
    def registry(self) -> TaskRegistry:
        """Get the task registry."""
        return self._registry

    @property
    def name(self) -> str:
        """Get the server name."""
        return self._server.name

    async def list_tools(self) -> list[types.Tool]:
        """List every registered task as an MCP tool."""
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema(),
            )
            for definition in (task.get_definition() for task in self._registry.list_tasks())
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """Execute a tool call.

        Args:
            name: Tool (task) name.
            arguments: Tool arguments.

        Returns:
            Text content with the task output.

        Raises:
            ToolCallError: If the task reported failure.
        """
        logger.debug(f"Tool call: {name}({arguments})")
        result = await self._registry.execute(name, **(arguments or {}))
        if not result.success:
            raise ToolCallError(result.error or f"Tool {name} failed")
        return [types.TextContent(type="text", text=format_output(result))]

    async def run(self) -> None:
        """Serve MCP over stdio until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{self.name} v{__version__} listening on stdio")
            await self._server.run(
                read_stream,
                write_stream,
                self._server.create_initialization_options(),
            )
