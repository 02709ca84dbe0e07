"""Derive hierarchical CLI command paths from tool names.

``getSiteConfig`` becomes ``("site", "config", "get")``: the leading verb
moves to the end so related tools share a resource group. This is a
heuristic, not a bijection; two tools may map to the same path.
"""

import re
from typing import Optional

_VERB_RE = re.compile(r"^([a-z]+)([A-Z].*)$")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")


def split_camel_case(text: str) -> list[str]:
    """Split at lowercase->uppercase boundaries: ``SiteConfig`` -> ``[Site, Config]``."""
    return _CAMEL_BOUNDARY_RE.sub(r"\1 \2", text).split(" ")


def split_tool_name(name: str) -> tuple[Optional[str], list[str]]:
    """Split a tool name into its verb and resource words.

    camelCase names split on the leading lowercase run; snake_case names
    split on underscores. Returns ``(None, [])`` when there is no verb.
    """
    if "_" in name:
        parts = [part for part in name.split("_") if part]
        if len(parts) < 2:
            return None, []
        return parts[0].lower(), parts[1:]

    match = _VERB_RE.match(name)
    if not match:
        return None, []
    verb, rest = match.groups()
    return verb, split_camel_case(rest)


def command_path(name: str, module: Optional[str] = None) -> tuple[str, ...]:
    """Return the command path for a tool name.

    Args:
        name: Tool name, e.g. ``getSiteConfig`` or ``get_site_config``.
        module: The tool's module label; only consulted for names with
            three or more resource words.
    """
    verb, words = split_tool_name(name)
    if verb is None:
        return (name.lower(),)

    words = [word.lower() for word in words]

    if len(words) == 1:
        return (words[0], verb)

    if len(words) == 2:
        return (words[0], words[1], verb)

    module_name = (module or "").lower().replace("_", "-")
    if module_name:
        if words[0] == module_name:
            return (*words, verb)

        compound = f"{words[0]}-{words[1]}"
        if compound == module_name:
            return (compound, *words[2:], verb)

    return (*words, verb)
