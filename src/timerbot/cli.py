"""Command-line interface for timerbot.

timerbot keeps named task timers in a JSON file and serves them to MCP
clients over stdio.

COMMANDS:
---------
- serve:  Run the MCP server on stdin/stdout (the default).
- start:  Start a timer directly, without an MCP client.
- stop:   Stop a timer and print the elapsed time.
- timers: Show running timers.
- tools:  List the tools the server exposes.
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from timerbot import __version__
from timerbot.config import settings
from timerbot.server import TimerServer
from timerbot.tasks import create_default_registry
from timerbot.timers import format_duration, format_timestamp, get_store

console = Console()
# stdout carries the MCP stream, so logs go to stderr
err_console = Console(stderr=True)

logger = logging.getLogger("timerbot")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else settings.log_level.upper()
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=err_console, show_path=verbose)],
    )


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the MCP server over stdio."""
    try:
        server = TimerServer()
        asyncio.run(server.run())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        sys.exit(1)


def _run_task(name: str, **kwargs: str) -> None:
    registry = create_default_registry()
    result = asyncio.run(registry.execute(name, **kwargs))

    if result.success:
        console.print(result.output, markup=False, highlight=False)
    else:
        err_console.print(f"[bold red]Error:[/bold red] {result.error}", highlight=False)
        sys.exit(1)


def cmd_start(args: argparse.Namespace) -> None:
    """Start a timer for a task."""
    _run_task("start_timer", task=args.task)


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the timer for a task."""
    _run_task("stop_timer", task=args.task)


def cmd_timers(args: argparse.Namespace) -> None:
    """Show all running timers."""
    store = get_store()
    timers = store.get_status()

    if not timers:
        console.print("No timers are running.")
        return

    table = Table(title=f"Running Timers ({store.path})")
    table.add_column("Task", style="cyan")
    table.add_column("Started", style="white")
    table.add_column("Elapsed", style="yellow", justify="right")

    for timer in timers:
        table.add_row(
            timer["task"],
            format_timestamp(timer["started_at"]),
            format_duration(timer["elapsed_seconds"]),
        )

    console.print(table)


def cmd_tools(args: argparse.Namespace) -> None:
    """List the tools exposed over MCP."""
    registry = create_default_registry()

    table = Table(title="Available Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Parameters", style="yellow")

    for task in sorted(registry.list_tasks(), key=lambda t: t.name):
        params = ", ".join(
            f"{p.name}: {p.type}" + ("" if p.required else "?")
            for p in task.get_parameters()
        )
        table.add_row(task.name, task.description, params or "-")

    console.print(table)


def cmd_version(args: argparse.Namespace) -> None:
    """Show version information."""
    console.print(f"timerbot v{__version__}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="timerbot",
        description="Named task timers served over the Model Context Protocol",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the MCP server on stdio (default)",
        description="Serve the start_timer and stop_timer tools over stdin/stdout.",
    )
    serve_parser.set_defaults(func=cmd_serve)

    start_parser = subparsers.add_parser(
        "start",
        help="Start a timer",
        description="Start a timer for a task. A running timer for the same task is restarted.",
        epilog="""Examples:
  timerbot start build                 Start timing "build"
  timerbot start "code review"         Task names may contain spaces""",
    )
    start_parser.add_argument("task", help="Name of the task to time")
    start_parser.set_defaults(func=cmd_start)

    stop_parser = subparsers.add_parser(
        "stop",
        help="Stop a timer",
        description="Stop the timer for a task and print the elapsed seconds as JSON.",
    )
    stop_parser.add_argument("task", help="Name of the task to stop timing")
    stop_parser.set_defaults(func=cmd_stop)

    timers_parser = subparsers.add_parser("timers", help="Show running timers")
    timers_parser.set_defaults(func=cmd_timers)

    tools_parser = subparsers.add_parser("tools", help="List tools exposed over MCP")
    tools_parser.set_defaults(func=cmd_tools)

    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the timerbot CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    func = getattr(args, "func", cmd_serve)
    func(args)


if __name__ == "__main__":
    main()
