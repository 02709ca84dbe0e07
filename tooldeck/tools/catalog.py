"""Read-only mapping from tool name to its callable and descriptor."""

import importlib
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from .introspect import collect_module_tools
from .schema import ToolDescriptor

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolEntry:
    """A registered tool: the callable plus its descriptor."""

    handler: Callable
    descriptor: ToolDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolCatalog:
    """Tools keyed by name. Built once, never mutated afterwards."""

    def __init__(self, entries: Iterable[ToolEntry] = ()):
        self._entries: dict[str, ToolEntry] = {}
        for entry in entries:
            self._entries[entry.name] = entry

    @classmethod
    def load(
        cls,
        callables: Iterable[tuple[str, Callable]],
        descriptors: Iterable[Union[ToolDescriptor, dict]],
    ) -> "ToolCatalog":
        """Pair callables with descriptors by name.

        Callables without a descriptor are left out and can never be
        invoked; so are descriptors without a callable.
        """
        by_name = {}
        for desc in descriptors:
            if isinstance(desc, dict):
                desc = ToolDescriptor.from_dict(desc)
            by_name[desc.name] = desc

        entries = []
        for name, fn in callables:
            if not callable(fn):
                continue
            desc = by_name.get(name)
            if desc is None:
                _log.debug("Skipping %s: no descriptor", name)
                continue
            entries.append(ToolEntry(handler=fn, descriptor=desc))
        return cls(entries)

    @classmethod
    def from_modules(cls, modules: Iterable[Union[str, ModuleType]]) -> "ToolCatalog":
        """Collect tools from modules given as objects or dotted import paths."""
        entries: dict[str, ToolEntry] = {}
        for module in modules:
            if isinstance(module, str):
                module = importlib.import_module(module)
            for fn, desc in collect_module_tools(module):
                existing = entries.get(desc.name)
                if existing is not None:
                    raise ValueError(
                        f"Tool '{desc.name}' from module '{desc.module}' "
                        f"conflicts with module '{existing.descriptor.module}'"
                    )
                entries[desc.name] = ToolEntry(handler=fn, descriptor=desc)
            _log.debug("Loaded tools from %s", module.__name__)
        return cls(entries.values())

    def get(self, name: str) -> Optional[ToolEntry]:
        return self._entries.get(name)

    def descriptor(self, name: str) -> Optional[ToolDescriptor]:
        entry = self._entries.get(name)
        return entry.descriptor if entry else None

    def names(self) -> list[str]:
        return list(self._entries)

    def descriptors(self) -> list[ToolDescriptor]:
        return [entry.descriptor for entry in self._entries.values()]

    def to_metadata(self) -> list[dict[str, Any]]:
        """Descriptor records for every tool, in catalog order."""
        return [entry.descriptor.to_dict() for entry in self._entries.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ToolEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
