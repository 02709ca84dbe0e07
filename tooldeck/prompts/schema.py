"""Prompt definitions and dependency references."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

# A dependency is a prompt id, {"any": [ids]} or {"all": [ids]}
DependencyRef = Union[str, dict[str, list]]

_KNOWN_KEYS = frozenset({
    "id", "title", "content", "depends", "dependsOn",
    "tools", "toolModules", "category", "filePath",
})


def dependency_id(ref: str) -> str:
    """Reduce a path-style reference to its prompt id: ``a/system.md`` -> ``system``."""
    filename = ref.rsplit("/", 1)[-1]
    for ext in (".md", ".markdown"):
        if filename.endswith(ext):
            return filename[: -len(ext)]
    return filename


def normalize_dependencies(deps: Any) -> list[DependencyRef]:
    """Normalize a raw ``depends`` value into a list of dependency references.

    A bare string becomes a one-element list. Path references reduce to
    ids. ``any``/``all`` combinators are kept (recursively normalized);
    anything else is dropped.
    """
    if not deps:
        return []
    if isinstance(deps, str):
        deps = [deps]
    if not isinstance(deps, (list, tuple)):
        return []

    result: list[DependencyRef] = []
    for dep in deps:
        if isinstance(dep, str):
            result.append(dependency_id(dep))
        elif isinstance(dep, dict):
            for key in ("any", "all"):
                if isinstance(dep.get(key), (list, tuple)):
                    ids = [dependency_id(d) for d in dep[key] if isinstance(d, str)]
                    result.append({key: ids})
                    break
    return result


@dataclass(frozen=True)
class PromptDef:
    """A named block of instruction text with its tool and prompt requirements."""

    id: str
    content: str = ""
    title: Optional[str] = None
    depends: tuple[DependencyRef, ...] = ()
    tools: tuple[str, ...] = ()
    category: Optional[str] = None
    file_path: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PromptDef":
        """Build from a front-matter style record (``dependsOn``/``toolModules`` accepted)."""
        depends = data.get("depends") or data.get("dependsOn")
        tools = data.get("tools") or data.get("toolModules") or []
        if isinstance(tools, str):
            tools = [tools]
        return cls(
            id=str(data["id"]),
            content=str(data.get("content") or ""),
            title=data.get("title"),
            depends=tuple(normalize_dependencies(depends)),
            tools=tuple(t for t in tools if isinstance(t, str)),
            category=data.get("category"),
            file_path=data.get("filePath"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def render(self) -> str:
        """Text block for this prompt in a composed system prompt."""
        if self.title:
            return f"## {self.title}\n\n{self.content}"
        return self.content
