"""Prompt system: catalog, markdown loader and dependency-resolving builder."""

from .builder import BuiltPrompt, PromptBuilder, is_module_name
from .catalog import PromptCatalog
from .loader import load_prompts, parse_front_matter
from .schema import PromptDef, normalize_dependencies

__all__ = [
    "BuiltPrompt",
    "PromptBuilder",
    "PromptCatalog",
    "PromptDef",
    "is_module_name",
    "load_prompts",
    "normalize_dependencies",
    "parse_front_matter",
]
