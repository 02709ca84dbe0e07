"""Tool catalog and registry.

Tools are plain Python functions grouped in modules. Descriptors come from
their signatures and docstrings (see ``introspect``) or from metadata records.
"""

from .catalog import ToolCatalog, ToolEntry
from .introspect import collect_module_tools, describe_callable, tool
from .naming import command_path
from .registry import ToolRegistry, tool_definition
from .schema import CommandDescriptor, ParamDef, ReturnDef, ToolDescriptor

__all__ = [
    "CommandDescriptor",
    "ParamDef",
    "ReturnDef",
    "ToolCatalog",
    "ToolDescriptor",
    "ToolEntry",
    "ToolRegistry",
    "collect_module_tools",
    "command_path",
    "describe_callable",
    "tool",
    "tool_definition",
]
