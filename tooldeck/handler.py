"""ToolHandler: one entry point for AI agents and the CLI.

Wires the tool registry and the prompt builder together behind a single
API. AI agents use ``get_tool_definitions`` / ``build_prompt`` /
``use_tool``; the CLI uses ``get_cli_commands`` / ``use_tool``.
"""

import logging
from typing import Any, Iterable, Optional, Union

from .config import ConfigManager
from .errors import TOOL_EXECUTION_FAILED, ToolExecutionError, ToolValidationError
from .prompts import BuiltPrompt, PromptBuilder, PromptCatalog
from .tools import CommandDescriptor, ToolCatalog, ToolRegistry

_log = logging.getLogger(__name__)

BUILTIN_TOOL_MODULES = ("tooldeck.builtins.system",)


class ToolHandler:
    """Facade over the tool registry and the prompt builder."""

    def __init__(
        self,
        tool_registry: Optional[ToolRegistry] = None,
        prompt_builder: Optional[PromptBuilder] = None,
    ):
        self.tool_registry = tool_registry or ToolRegistry()
        self.prompt_builder = prompt_builder or PromptBuilder(PromptCatalog(), self.tool_registry)

    @classmethod
    def from_modules(
        cls,
        modules: Iterable[Union[str, Any]],
        prompts: Optional[PromptCatalog] = None,
    ) -> "ToolHandler":
        """Build a handler from tool modules and an optional prompt catalog."""
        registry = ToolRegistry(ToolCatalog.from_modules(modules))
        return cls(registry, PromptBuilder(prompts or PromptCatalog(), registry))

    @classmethod
    def from_config(cls, config: ConfigManager) -> "ToolHandler":
        modules = list(config.get_tool_modules())
        if config.get_tools_config().get("builtins", True):
            modules = [*BUILTIN_TOOL_MODULES, *modules]

        prompts_dir = config.get_prompts_dir()
        prompts = PromptCatalog.from_directory(prompts_dir) if prompts_dir else PromptCatalog()
        return cls.from_modules(modules, prompts)

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Tool definitions formatted for AI function calling."""
        return self.tool_registry.get_tool_definitions()

    def get_cli_commands(self) -> list[CommandDescriptor]:
        return self.tool_registry.get_cli_commands()

    def get_available_prompts(self) -> list[str]:
        return self.prompt_builder.get_available_prompts()

    def build_prompt(self, prompt_id: str) -> BuiltPrompt:
        """Build a complete system prompt with dependencies resolved."""
        return self.prompt_builder.build(prompt_id)

    def has_tool(self, name: str) -> bool:
        return self.tool_registry.has_tool(name)

    async def use_tool(self, name: str, parameters: Optional[dict[str, Any]] = None) -> Any:
        """Run a tool by name.

        Raises:
            ToolValidationError: The tool or its parameters are invalid.
            ToolExecutionError: The tool failed while running.
        """
        try:
            return await self.tool_registry.use_tool(name, parameters)
        except ToolValidationError as e:
            _log.info(e.describe())
            raise
        except ToolExecutionError:
            raise
        except Exception as e:
            raise ToolExecutionError(
                f'Error executing tool "{name}": {e}',
                tool_name=name,
                parameters=parameters,
                cause=e,
                code=TOOL_EXECUTION_FAILED,
            ) from e
