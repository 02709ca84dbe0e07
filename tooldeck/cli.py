"""tooldeck CLI - every registered tool as a nested command.

Command paths come from tool names (``getSiteConfig`` ->
``site config get``); every tool parameter becomes a ``--flag``.
"""

import asyncio
import logging
import os
import sys
import traceback
from typing import Any, Optional, Sequence

import click
from rich.logging import RichHandler

from .config import ConfigManager
from .context import cli_context
from .errors import PromptError, ToolError
from .handler import ToolHandler
from .output import err_console, print_result, render_command_list, render_error, render_tool_help
from .tools.schema import CommandDescriptor, ParamDef

_log = logging.getLogger(__name__)

_POSITIONAL = "_positional_"


def configure_logging(level: str = "WARNING") -> None:
    """Route tooldeck logs through rich on stderr."""
    logger = logging.getLogger("tooldeck")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def _flag(param: ParamDef) -> str:
    return f"--{param.name.replace('_', '-')}"


def _option(param: ParamDef) -> click.Option:
    # Absent flags stay absent so the tool's own default applies
    help_text = param.description
    if param.default_value is not None:
        help_text = f"{help_text} [default: {param.default_value}]".strip()

    if param.optional:
        # "--name" alone means true, "--name x" passes x
        return click.Option(
            [_flag(param), param.name],
            type=click.STRING,
            is_flag=False,
            flag_value="true",
            default=None,
            metavar="[value]",
            help=help_text,
        )
    return click.Option(
        [_flag(param), param.name],
        type=click.STRING,
        default=None,
        metavar="<value>",
        help=help_text,
    )


def _positional_param(cmd: CommandDescriptor) -> Optional[ParamDef]:
    """The first param, if it is a required string, doubles as a positional argument."""
    if not cmd.params:
        return None
    first = cmd.params[0]
    if not first.optional and first.type == "string":
        return first
    return None


class ToolCommand(click.Command):
    """A leaf command that runs one tool through the handler."""

    def __init__(self, cmd: CommandDescriptor, handler: ToolHandler):
        self.tool = cmd
        self.handler = handler
        self.positional = _positional_param(cmd)

        params: list[click.Parameter] = []
        if self.positional is not None:
            params.append(click.Argument(
                [_POSITIONAL],
                required=False,
                metavar=f"<{self.positional.name}>",
            ))
        params.extend(_option(p) for p in cmd.params)

        super().__init__(
            name=cmd.leaf,
            params=params,
            callback=self._run,
            help=cmd.description,
            short_help=cmd.description,
            epilog="\n".join(f"Example: {e}" for e in cmd.examples) or None,
        )

    def tool_parameters(self, values: dict[str, Any]) -> dict[str, Any]:
        """Map parsed click values to tool parameters."""
        values = dict(values)
        positional = values.pop(_POSITIONAL, None)
        if self.positional is not None and positional is not None:
            if values.get(self.positional.name) is None:
                values[self.positional.name] = positional
        return {name: value for name, value in values.items() if value is not None}

    def _run(self, **values: Any) -> None:
        parameters = self.tool_parameters(values)
        try:
            result = asyncio.run(self.handler.use_tool(self.tool.name, parameters))
        except ToolError as e:
            _report(e)
            sys.exit(1)
        print_result(result, json_mode=cli_context.json_mode)


def _report(error: ToolError) -> None:
    if cli_context.json_mode:
        print_result(error.to_dict(), json_mode=True)
    else:
        render_error(error.message)
        for problem in getattr(error, "validation_errors", None) or ():
            render_error(f"  {problem}")
    if cli_context.verbosity == "debug" or os.getenv("DEBUG"):
        cause = error.cause or error
        err_console.print("".join(traceback.format_exception(type(cause), cause, cause.__traceback__)))


def register_commands(program: click.Group, handler: ToolHandler) -> click.Group:
    """Add every non-private tool to ``program`` as a nested command."""
    for cmd in handler.get_cli_commands():
        current = program
        path: list[str] = []
        for segment in cmd.group_path:
            path.append(segment)
            existing = current.commands.get(segment)
            if existing is None:
                existing = click.Group(name=segment, help=f"{' '.join(path)} commands")
                current.add_command(existing)
            elif not isinstance(existing, click.Group):
                _log.warning(
                    "Skipping %s: '%s' is already a command", cmd.name, " ".join(path),
                )
                current = None
                break
            current = existing

        if current is None:
            continue

        existing = current.commands.get(cmd.leaf)
        if isinstance(existing, click.Group):
            _log.warning("Skipping %s: '%s' is a command group", cmd.name, " ".join(cmd.command))
            continue
        if existing is not None:
            _log.warning(
                "Command '%s' from %s replaces an existing command",
                " ".join(cmd.command), cmd.name,
            )
        current.add_command(ToolCommand(cmd, handler))

    return program


def find_command(program: click.Group, argv: Sequence[str]) -> tuple[ToolCommand, list[str]]:
    """Walk the command tree along ``argv``; return the tool command and its remaining args."""
    command: click.Command = program
    args = list(argv)
    path: list[str] = []
    while isinstance(command, click.Group):
        if not args:
            raise click.UsageError(f"Incomplete command: '{' '.join(path)}'")
        segment = args.pop(0)
        path.append(segment)
        sub = command.commands.get(segment)
        if sub is None:
            raise click.UsageError(f"No such command: '{' '.join(path)}'")
        command = sub

    if not isinstance(command, ToolCommand):
        raise click.UsageError(f"'{' '.join(path)}' does not run a tool")
    return command, args


async def dispatch(argv: Sequence[str]) -> Any:
    """Run a tool command line (without the program name) through the handler."""
    command, args = find_command(cli_context.get_program(), argv)
    ctx = command.make_context(command.name, args)
    parameters = command.tool_parameters(ctx.params)
    return await cli_context.get_handler().use_tool(command.tool.name, parameters)


def _find_descriptor(handler: ToolHandler, words: Sequence[str]) -> Optional[CommandDescriptor]:
    wanted = tuple(words)
    for cmd in handler.get_cli_commands():
        if cmd.command == wanted or cmd.name == " ".join(words):
            return cmd
    return None


def _add_builtin_commands(program: click.Group, handler: ToolHandler) -> None:
    @program.group(name="prompt")
    def prompt_group():
        """Build and list system prompts."""

    @prompt_group.command(name="list")
    def prompt_list():
        """List available prompt ids."""
        print_result(handler.get_available_prompts(), json_mode=cli_context.json_mode)

    @prompt_group.command(name="build")
    @click.argument("prompt_id")
    @click.option("--tools-only", is_flag=True, help="Print only the resolved tool names")
    def prompt_build(prompt_id, tools_only):
        """Compose a prompt with its dependencies."""
        try:
            built = handler.build_prompt(prompt_id)
        except PromptError as e:
            raise click.ClickException(str(e))

        if tools_only:
            print_result(built.tool_names, json_mode=cli_context.json_mode)
        elif cli_context.json_mode:
            print_result(built.to_dict(), json_mode=True)
        else:
            print_result(built.system_prompt)

    @program.command(name="tools")
    def tools_list():
        """List every command grouped by module."""
        commands = handler.get_cli_commands()
        if cli_context.json_mode:
            print_result([c.to_dict() for c in commands], json_mode=True)
            return
        render_command_list(commands, program=program.name or "")

    @program.command(name="describe")
    @click.argument("words", nargs=-1, required=True)
    def describe(words):
        """Show parameters and examples for a command or tool name."""
        cmd = _find_descriptor(handler, words)
        if cmd is None:
            raise click.ClickException(f"Unknown tool: {' '.join(words)}")
        if cli_context.json_mode:
            print_result(cmd.to_dict(), json_mode=True)
        else:
            render_tool_help(cmd)


def build_cli(handler: ToolHandler, info: Optional[dict[str, Any]] = None) -> click.Group:
    """Create the root command group with built-in and tool commands."""
    info = info or {}
    name = info.get("name") or "tooldeck"

    @click.group(name=name, help=info.get("description") or None)
    @click.version_option(version=str(info.get("version") or "0.1.0"), prog_name=name)
    @click.option("--verbose", is_flag=True, help="Enable verbose output")
    @click.option("--debug", is_flag=True, help="Enable debug mode")
    @click.option("--json", "json_output", is_flag=True, help="Enable JSON output")
    def program(verbose, debug, json_output):
        cli_context.add_options({"verbose": verbose, "debug": debug, "json": json_output})
        if debug:
            configure_logging("DEBUG")
        elif verbose:
            configure_logging("INFO")

    _add_builtin_commands(program, handler)
    register_commands(program, handler)
    cli_context.initialize(program, handler)
    return program


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point."""
    config = ConfigManager()
    configure_logging(config.get_log_level())
    handler = ToolHandler.from_config(config)
    program = build_cli(handler, config.get_cli_config())
    program.main(args=list(argv) if argv is not None else None, prog_name=program.name)


if __name__ == "__main__":
    main()
