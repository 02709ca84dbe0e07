"""Compose a prompt with its dependencies into one system prompt plus tool list.

Dependencies are walked depth-first. Each recursive call gets its own copy
of the ids on the current path, so a prompt shared by two branches (a
diamond) is fine while a prompt that reaches itself is a cycle.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import CircularDependencyError, PromptNotFoundError
from ..tools.registry import ToolRegistry
from .catalog import PromptCatalog
from .schema import DependencyRef, PromptDef

_log = logging.getLogger(__name__)

MODULE_NAME_MAX_LENGTH = 20


def is_module_name(name: str) -> bool:
    """Heuristic: short names without ``/`` or ``.`` are module names.

    This also matches most literal tool names (``getSiteConfig``), which
    then expand to the tools of a module by that name, usually none.
    """
    return len(name) < MODULE_NAME_MAX_LENGTH and "/" not in name and "." not in name


@dataclass(frozen=True)
class BuiltPrompt:
    """A composed system prompt and the tools it requires."""

    system_prompt: str
    tools: tuple[dict[str, Any], ...] = ()

    @property
    def tool_names(self) -> list[str]:
        return [t["name"] for t in self.tools]

    def to_dict(self) -> dict[str, Any]:
        return {"systemPrompt": self.system_prompt, "tools": list(self.tools)}


class PromptBuilder:
    """Resolve prompt dependency graphs against a prompt catalog and tool registry."""

    def __init__(self, prompts: PromptCatalog, tools: Optional[ToolRegistry] = None):
        self.prompts = prompts
        self.tools = tools or ToolRegistry()

    def get_available_prompts(self) -> list[str]:
        return self.prompts.get_available_prompts()

    def build(self, prompt_id: str) -> BuiltPrompt:
        """Build the complete prompt for ``prompt_id``.

        Raises:
            PromptNotFoundError: ``prompt_id`` is not in the catalog.
            CircularDependencyError: a prompt depends on itself, directly
                or transitively.
        """
        prompt = self.prompts.get(prompt_id)
        if prompt is None:
            raise PromptNotFoundError(prompt_id)

        ordered = [*self.resolve_dependencies(prompt), prompt]

        tool_names: dict[str, None] = {}
        for item in ordered:
            for name in self.resolve_tools(item):
                tool_names.setdefault(name, None)

        return BuiltPrompt(
            system_prompt=self.concatenate(ordered),
            tools=tuple(self._tool_record(name) for name in tool_names),
        )

    def resolve_dependencies(
        self,
        prompt: PromptDef,
        visiting: frozenset = frozenset(),
    ) -> list[PromptDef]:
        """Return ``prompt``'s transitive dependencies, deepest first, without duplicates."""
        if prompt.id in visiting:
            raise CircularDependencyError(prompt.id)

        path = visiting | {prompt.id}
        resolved: list[PromptDef] = []

        for ref in prompt.depends:
            for dep in self._select(ref, prompt):
                resolved.extend(self.resolve_dependencies(dep, path))
                resolved.append(dep)

        return _unique(resolved)

    def _select(self, ref: DependencyRef, owner: PromptDef) -> list[PromptDef]:
        """Pick the prompts a dependency reference stands for."""
        if isinstance(ref, str):
            dep = self.prompts.get(ref)
            if dep is None:
                _log.warning('Dependency "%s" not found for prompt "%s"', ref, owner.id)
                return []
            return [dep]

        if ref.get("any"):
            for candidate in ref["any"]:
                dep = self.prompts.get(candidate)
                if dep is not None:
                    return [dep]
            _log.warning(
                'None of the alternative dependencies could be resolved for prompt "%s"',
                owner.id,
            )
            return []

        selected = []
        for candidate in ref.get("all") or ():
            dep = self.prompts.get(candidate)
            if dep is None:
                _log.warning(
                    'Required dependency "%s" not found for prompt "%s"', candidate, owner.id,
                )
                continue
            selected.append(dep)
        return selected

    def resolve_tools(self, prompt: PromptDef) -> list[str]:
        """Tool names a single prompt asks for, with module names expanded."""
        names: dict[str, None] = {}
        for entry in prompt.tools:
            if is_module_name(entry):
                for name in self.tools.get_module_tools(entry):
                    names.setdefault(name, None)
            else:
                names.setdefault(entry, None)
        return list(names)

    @staticmethod
    def concatenate(prompts: list[PromptDef]) -> str:
        return "\n\n".join(p.render() for p in prompts)

    def _tool_record(self, name: str) -> dict[str, Any]:
        desc = self.tools.get_tool_metadata(name)
        if desc is None:
            _log.warning('Tool "%s" is not registered', name)
            return {"name": name}
        return {**desc.to_dict(), "name": name}


def _unique(prompts: list[PromptDef]) -> list[PromptDef]:
    seen = set()
    result = []
    for prompt in prompts:
        if prompt.id not in seen:
            seen.add(prompt.id)
            result.append(prompt)
    return result
