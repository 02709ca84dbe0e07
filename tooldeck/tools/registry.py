"""Tool registry: AI schemas, CLI command views and validated dispatch."""

import inspect
import logging
from typing import Any, Optional

from ..errors import (
    PARAMETER_VALIDATION_FAILED,
    TOOL_EXECUTION_FAILED,
    UNKNOWN_TOOL,
    ToolExecutionError,
    ToolValidationError,
)
from .catalog import ToolCatalog
from .naming import command_path
from .schema import CommandDescriptor, ParamDef, ToolDescriptor
from .validation import (
    base_type,
    fill_missing,
    map_json_type,
    prepare_arguments,
    validate_parameters,
)

_log = logging.getLogger(__name__)


def _param_property(param: ParamDef) -> dict[str, Any]:
    prop: dict[str, Any] = {
        "type": map_json_type(param.type),
        "description": param.description or f"Parameter {param.name}",
    }
    if base_type(param.type) == "enum" and param.values:
        prop["enum"] = list(param.values)
    if param.default_value is not None:
        prop["default"] = param.default_value
    return prop


def tool_definition(desc: ToolDescriptor) -> dict[str, Any]:
    """Function-calling schema for one tool."""
    return {
        "name": desc.name,
        "description": desc.description or f"Execute the {desc.name} function",
        "parameters": {
            "type": "object",
            "properties": {p.name: _param_property(p) for p in desc.params},
            "required": [p.name for p in desc.params if not p.optional],
        },
    }


class ToolRegistry:
    """Owns the tool catalog and exposes it to AI agents and the CLI."""

    def __init__(self, catalog: Optional[ToolCatalog] = None):
        self.catalog = catalog or ToolCatalog()

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Function-calling schemas for every public tool."""
        return [
            tool_definition(desc)
            for desc in self.catalog.descriptors()
            if desc.is_public
        ]

    def get_cli_commands(self) -> list[CommandDescriptor]:
        """Command views for every non-private tool, recomputed on each call."""
        return [
            CommandDescriptor(command=command_path(desc.name, desc.module), tool=desc)
            for desc in self.catalog.descriptors()
            if not desc.is_private
        ]

    def has_tool(self, name: str) -> bool:
        return name in self.catalog

    def get_tool_names(self) -> list[str]:
        return self.catalog.names()

    def get_tool_metadata(self, name: str) -> Optional[ToolDescriptor]:
        return self.catalog.descriptor(name)

    def get_module_tools(self, module: str) -> list[str]:
        """Names of the public tools declared in ``module``."""
        return [
            desc.name
            for desc in self.catalog.descriptors()
            if desc.module == module and desc.is_public
        ]

    async def use_tool(self, name: str, parameters: Optional[dict[str, Any]] = None) -> Any:
        """Validate ``parameters`` and invoke the named tool.

        Raises:
            ToolValidationError: Unknown tool, or any parameter problems
                (all of them, not just the first).
            ToolExecutionError: The tool itself raised; ``cause`` holds
                the original exception.
        """
        parameters = dict(parameters or {})
        entry = self.catalog.get(name)

        if entry is None:
            raise ToolValidationError(
                f'Unknown tool: "{name}"',
                tool_name=name,
                parameters=parameters,
                code=UNKNOWN_TOOL,
            )

        desc = entry.descriptor
        errors = validate_parameters(parameters, desc.params)
        if errors:
            raise ToolValidationError(
                "Parameter validation failed",
                tool_name=name,
                parameters=parameters,
                validation_errors=errors,
                code=PARAMETER_VALIDATION_FAILED,
            )

        args = fill_missing(prepare_arguments(parameters, desc.params), entry.handler, desc.params)
        _log.debug("Calling %s args=%r", name, args)

        try:
            result = entry.handler(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise ToolExecutionError(
                str(e),
                tool_name=name,
                parameters=parameters,
                cause=e,
                code=TOOL_EXECUTION_FAILED,
            ) from e

        return result
