"""Shared CLI state: the root command, the handler and global options.

Tools that need to drive other commands (``system.run``) read the program
and handler from here.
"""

from typing import Any, Optional


class CLIContext:
    """Holds references set up when commands are registered."""

    def __init__(self):
        self.program = None
        self.handler = None
        self.options: dict[str, Any] = {}

    def initialize(self, program, handler, options: Optional[dict[str, Any]] = None) -> None:
        self.program = program
        self.handler = handler
        self.options = dict(options or {})

    def add_options(self, options: dict[str, Any]) -> None:
        self.options = {**self.options, **options}

    @property
    def verbosity(self) -> str:
        if self.options.get("debug"):
            return "debug"
        if self.options.get("verbose"):
            return "verbose"
        if self.options.get("quiet"):
            return "quiet"
        return "normal"

    @property
    def json_mode(self) -> bool:
        return bool(self.options.get("json"))

    def get_program(self):
        if self.program is None:
            raise RuntimeError("CLI context not initialized")
        return self.program

    def get_handler(self):
        if self.handler is None:
            raise RuntimeError("CLI context not initialized")
        return self.handler


cli_context = CLIContext()
