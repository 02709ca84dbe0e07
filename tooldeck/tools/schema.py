"""Immutable descriptors for tools and their CLI command views."""

from dataclasses import dataclass, field
from typing import Any, Optional

VISIBILITY_PUBLIC = "public"
VISIBILITY_PROTECTED = "protected"
VISIBILITY_PRIVATE = "private"

VISIBILITIES = (VISIBILITY_PUBLIC, VISIBILITY_PROTECTED, VISIBILITY_PRIVATE)


@dataclass(frozen=True)
class ParamDef:
    """A single declared tool parameter."""

    name: str
    type: str = "any"
    description: str = ""
    optional: bool = False
    default_value: Any = None
    values: Optional[tuple] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ParamDef":
        values = data.get("values")
        return cls(
            name=data["name"],
            type=data.get("type") or "any",
            description=data.get("description") or "",
            optional=bool(data.get("optional", False)),
            default_value=data.get("defaultValue", data.get("default_value")),
            values=tuple(values) if values is not None else None,
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "optional": self.optional,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.values is not None:
            data["values"] = list(self.values)
        return data


@dataclass(frozen=True)
class ReturnDef:
    """Documented return value of a tool."""

    type: str
    description: str = ""

    def to_dict(self) -> dict:
        return {"type": self.type, "description": self.description}


@dataclass(frozen=True)
class ToolDescriptor:
    """Static metadata describing one tool.

    ``visibility`` is ``None`` when the tool never declared one, which
    behaves like ``"public"`` everywhere.
    """

    name: str
    module: str = ""
    description: str = ""
    params: tuple[ParamDef, ...] = ()
    examples: tuple[str, ...] = ()
    returns: Optional[ReturnDef] = None
    visibility: Optional[str] = None

    @property
    def is_public(self) -> bool:
        return self.visibility is None or self.visibility == VISIBILITY_PUBLIC

    @property
    def is_private(self) -> bool:
        return self.visibility == VISIBILITY_PRIVATE

    def param(self, name: str) -> Optional[ParamDef]:
        for param in self.params:
            if param.name == name:
                return param
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "ToolDescriptor":
        returns = data.get("returns")
        return cls(
            name=data["name"],
            module=data.get("module") or "",
            description=data.get("description") or "",
            params=tuple(ParamDef.from_dict(p) for p in data.get("params") or ()),
            examples=tuple(str(e) for e in data.get("examples") or ()),
            returns=ReturnDef(
                type=returns.get("type", "any"),
                description=returns.get("description", ""),
            ) if returns else None,
            visibility=data.get("visibility"),
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "module": self.module,
            "name": self.name,
            "description": self.description,
            "params": [p.to_dict() for p in self.params],
            "examples": list(self.examples),
        }
        if self.returns is not None:
            data["returns"] = self.returns.to_dict()
        if self.visibility is not None:
            data["visibility"] = self.visibility
        return data


@dataclass(frozen=True)
class CommandDescriptor:
    """CLI-facing view of a tool: its descriptor plus a command path."""

    command: tuple[str, ...]
    tool: ToolDescriptor = field(repr=False)

    @property
    def name(self) -> str:
        return self.tool.name

    @property
    def module(self) -> str:
        return self.tool.module

    @property
    def description(self) -> str:
        return self.tool.description

    @property
    def params(self) -> tuple[ParamDef, ...]:
        return self.tool.params

    @property
    def examples(self) -> tuple[str, ...]:
        return self.tool.examples

    @property
    def group_path(self) -> tuple[str, ...]:
        """Nested subcommand path (everything but the leaf)."""
        return self.command[:-1]

    @property
    def leaf(self) -> str:
        return self.command[-1]

    def to_dict(self) -> dict:
        return {"command": list(self.command), **self.tool.to_dict()}
