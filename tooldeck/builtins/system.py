"""Built-in ``system`` tools available in every CLI."""

import asyncio
import logging
import shlex
from typing import Any

from ..cli import dispatch
from ..tools import tool

TOOL_MODULE = "system"

__all__ = ["run"]

_log = logging.getLogger(__name__)


def parse_commands(commands: str) -> list[list[str]]:
    """Split ``a --x 1; b "c d"`` into argument lists, one per command."""
    lexer = shlex.shlex(commands, posix=True, punctuation_chars=";")
    lexer.whitespace_split = True

    parsed: list[list[str]] = []
    current: list[str] = []
    for token in lexer:
        if token and set(token) == {";"}:
            if current:
                parsed.append(current)
            current = []
        else:
            current.append(token)
    if current:
        parsed.append(current)
    return parsed


async def _run_one(argv: list[str]) -> dict[str, Any]:
    line = " ".join(argv)
    return {"command": line, "result": await dispatch(argv)}


@tool(
    visibility="protected",
    examples=["run \"site add docs; page add intro --site docs\"", "run \"a; b\" --parallel"],
)
async def run(commands: str, skip: bool = False, parallel: bool = False) -> list:
    """Execute multiple commands in sequence or in parallel.

    Only available to CLI users, not AI agents.

    Args:
        commands: Command lines separated by semicolons (;).
        skip: Keep going when a command fails.
        parallel: Run the commands concurrently.

    Returns:
        One record per command with its result or error.
    """
    command_list = parse_commands(commands)
    results: list[dict[str, Any]] = []

    if parallel:
        outcomes = await asyncio.gather(
            *(_run_one(argv) for argv in command_list),
            return_exceptions=True,
        )
        for argv, outcome in zip(command_list, outcomes):
            if isinstance(outcome, Exception):
                if not skip:
                    raise outcome
                _log.warning("Command failed: %s. Error: %s", " ".join(argv), outcome)
                outcome = {"command": " ".join(argv), "error": str(outcome)}
            results.append(outcome)
        return results

    for argv in command_list:
        try:
            results.append(await _run_one(argv))
        except Exception as e:
            if not skip:
                raise
            _log.warning("Command failed: %s. Error: %s", " ".join(argv), e)
            results.append({"command": " ".join(argv), "error": str(e)})
    return results
