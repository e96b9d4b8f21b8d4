"""Dispatch tracing for emitters created with ``trace=True``.

Each dispatch prints one line to stderr with the event name, the number of
handlers, the duration and any error. Verbose mode adds a table of the
positional arguments and the collected results.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

# stderr keeps trace output away from the host program's stdout
_console = Console(stderr=True)


def _shorten(value: Any, limit: int) -> str:
    text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def format_trace(
    eventname: str,
    method: str,
    args: Sequence[Any] = (),
    handler_count: int = 0,
    duration_ms: float | None = None,
    results: Sequence[Any] | None = None,
    error: BaseException | None = None,
    verbosity: int = 1,
) -> tuple[Text, Table | None]:
    """
    Build the Rich renderables for one dispatch.

    Returns:
        Tuple of (main_text, optional_table)
    """
    text = Text()
    text.append("⚡ ", style="bold")
    text.append(eventname, style="bold blue")
    text.append(" | ")
    text.append(f"{method}()", style="blue")
    text.append(" | ")

    if handler_count > 0:
        text.append(f"handlers: {handler_count}", style="green")
    else:
        text.append("no handlers", style="dim red")

    if duration_ms is not None:
        text.append(" | ")
        if duration_ms < 10:
            dur_style = "green"
        elif duration_ms < 100:
            dur_style = "yellow"
        else:
            dur_style = "red"
        text.append(f"{duration_ms:.2f}ms", style=f"bold {dur_style}")

    if error:
        text.append(" | ")
        text.append(f"ERROR: {error!r}", style="bold red")

    if verbosity == 1 and args:
        # Normal verbosity shows the first three arguments inline
        summary = ", ".join(_shorten(arg, 20) for arg in list(args)[:3])
        text.append(f" [{summary}", style="dim")
        if len(args) > 3:
            text.append(f", +{len(args) - 3} more", style="dim italic")
        text.append("]", style="dim")

    table = None
    if verbosity >= 2:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Field", style="cyan", width=15)
        table.add_column("Value", overflow="fold")

        for index, arg in enumerate(args):
            table.add_row(f"arg:{index}", _shorten(arg, 100))

        if results is not None:
            table.add_row("results", _shorten(list(results), 200), style="green")

        if error:
            table.add_row("error", str(error), style="red")

    return text, table


def log_dispatch(
    eventname: str,
    method: str,
    args: Sequence[Any] = (),
    handler_count: int = 0,
    duration_ms: float | None = None,
    results: Sequence[Any] | None = None,
    error: BaseException | None = None,
    verbosity: int = 1,
    console: Console | None = None,
) -> None:
    """Print the trace for one dispatch."""
    text, table = format_trace(
        eventname,
        method,
        args,
        handler_count,
        duration_ms=duration_ms,
        results=results,
        error=error,
        verbosity=verbosity,
    )
    out = console if console is not None else _console
    out.print(text)
    if table is not None:
        out.print(table)
