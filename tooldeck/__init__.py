"""tooldeck - expose documented functions to AI agents and a nested CLI."""

__version__ = "0.1.0"

from .config import ConfigManager
from .errors import (
    CircularDependencyError,
    PromptError,
    PromptNotFoundError,
    ToolError,
    ToolExecutionError,
    ToolValidationError,
)
from .handler import ToolHandler
from .tools import tool

__all__ = [
    "CircularDependencyError",
    "ConfigManager",
    "PromptError",
    "PromptNotFoundError",
    "ToolError",
    "ToolExecutionError",
    "ToolHandler",
    "ToolValidationError",
    "tool",
]
