"""Terminal rendering for tool results, errors and command listings."""

import json
from itertools import groupby
from typing import Any, Iterable

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from .tools.schema import CommandDescriptor

ACCENT = "#00d4e5"
MUTED = "#6a6a80"
ERROR = "#e55a6e"
PARAM = "#e5c747"

console = Console()
err_console = Console(stderr=True)


def _is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _is_tabular(value: Any) -> bool:
    return (
        isinstance(value, list)
        and bool(value)
        and all(
            isinstance(item, dict) and all(_is_primitive(v) for v in item.values())
            for item in value
        )
    )


def print_result(result: Any, json_mode: bool = False, compact: bool = False) -> None:
    """Print a tool result.

    Primitives print as text, lists of flat records as a table, other
    containers pretty-printed. ``json_mode`` prints JSON instead.
    """
    if result is None:
        return

    if json_mode:
        text = json.dumps(result, indent=None if compact else 2, default=str)
        console.print(text, markup=False, highlight=False, soft_wrap=True)
        return

    if _is_primitive(result):
        console.print(str(result), markup=False, highlight=False, soft_wrap=True)
        return

    if _is_tabular(result):
        columns: dict[str, None] = {}
        for row in result:
            for key in row:
                columns.setdefault(key, None)

        table = Table(show_header=True, header_style=f"bold {ACCENT}")
        for column in columns:
            table.add_column(str(column))
        for row in result:
            table.add_row(*("" if row.get(c) is None else str(row.get(c)) for c in columns))
        console.print(table)
        return

    console.print(Pretty(result, expand_all=not compact))


def render_error(text: str) -> None:
    """Render an error message."""
    err = Text()
    err.append("err ", style=f"bold {ERROR}")
    err.append("| ", style=f"dim {MUTED}")
    err.append(text, style=ERROR)
    err_console.print(err)


def render_command_list(commands: Iterable[CommandDescriptor], program: str = "") -> None:
    """Print every command grouped by module, with its params."""
    ordered = sorted(commands, key=lambda c: (c.module, c.command))
    for module, items in groupby(ordered, key=lambda c: c.module):
        console.print(Text(f"  {(module or 'other').upper()}", style=f"bold {ACCENT}"))
        for cmd in items:
            line = Text("  ")
            line.append(" ".join(cmd.command), style="green")
            if cmd.description:
                line.append(f" - {cmd.description}")
            console.print(line)

            if cmd.params:
                params = Text("    > ")
                for index, param in enumerate(cmd.params):
                    if index:
                        params.append(", ")
                    params.append(param.name, style=PARAM)
                    if param.optional:
                        params.append(" (optional)", style=MUTED)
                    if param.default_value is not None:
                        params.append(f" [default: {param.default_value}]", style=MUTED)
                console.print(params)
        console.print()

    hint = f"Use '{program} describe <command>' for details on a specific command."
    console.print(Text(hint.strip(), style=MUTED))


def render_tool_help(cmd: CommandDescriptor) -> None:
    """Print the detailed help for one command."""
    text = Text()
    text.append("Tool: ", style="bold")
    text.append(f"{cmd.name}\n")
    text.append("Command: ", style="bold")
    text.append(f"{' '.join(cmd.command)}\n")
    text.append("Description: ", style="bold")
    text.append(f"{cmd.description}\n\n")

    text.append("Parameters:\n", style="bold")
    for param in cmd.params:
        optional = " (optional)" if param.optional else ""
        text.append(f"  {param.name}", style=ACCENT)
        text.append(f": {param.type}{optional}\n")
        if param.description:
            text.append(f"    {param.description}\n")

    if cmd.examples:
        text.append("\nExamples:\n", style="bold")
        for example in cmd.examples:
            text.append(f"  {example}\n")

    console.print(text, end="")
