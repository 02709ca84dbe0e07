"""Validate untyped caller input against declared tool parameters.

Callers (an AI agent, a CLI) send loosely-typed values: numbers as strings,
booleans as ``"yes"``. Validation accepts those forms and reports every
problem in one pass; ``prepare_arguments`` then orders and coerces values
for the positional call and ``fill_missing`` supplies the callable's
defaults for values left out.
"""

import inspect
import re
from typing import Any, Callable, Sequence

from .schema import ParamDef

_JSON_TYPES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "object": "object",
    "array": "array",
    "null": "null",
    "undefined": "null",
    "none": "null",
    "any": "string",
    "enum": "string",
    "function": "string",
    "symbol": "string",
    "bigint": "string",
    "date": "string",
}

BOOLEAN_STRINGS = frozenset({"true", "false", "0", "1", "yes", "no"})
TRUTHY_STRINGS = frozenset({"true", "1", "yes"})

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def base_type(type_name: str) -> str:
    """Strip generic parameters: ``Array<string>`` -> ``array``."""
    head = type_name.split("<", 1)[0].split("[", 1)[0]
    return head.strip().lower()


def map_json_type(type_name: str) -> str:
    """Map a descriptor type to its JSON Schema type (unknown types -> string)."""
    if not type_name:
        return "string"
    return _JSON_TYPES.get(base_type(type_name), "string")


def is_numeric(value: Any) -> bool:
    """Decimal numbers with an optional exponent; no inf, nan or underscores."""
    return isinstance(value, str) and _NUMERIC_RE.match(value) is not None


def check_type(value: Any, type_name: str) -> bool:
    """Return True if ``value`` is acceptable for ``type_name``."""
    kind = base_type(type_name)

    if kind == "string":
        return isinstance(value, str)
    if kind == "number":
        if isinstance(value, bool):
            return False
        return isinstance(value, (int, float)) or is_numeric(value)
    if kind == "boolean":
        if isinstance(value, bool):
            return True
        return isinstance(value, str) and value.lower() in BOOLEAN_STRINGS
    if kind == "object":
        return isinstance(value, dict)
    if kind == "array":
        return isinstance(value, (list, tuple))
    if kind == "null":
        return value is None
    if kind == "enum":
        # Membership is checked separately
        return isinstance(value, str)
    # any, and types we do not know how to check
    return True


def _provided(parameters: dict, name: str) -> bool:
    return parameters.get(name) is not None


def validate_parameters(parameters: dict, params: Sequence[ParamDef]) -> list[str]:
    """Return every validation problem found in ``parameters``.

    ``None`` counts as "not provided", matching how CLI options that were
    not given arrive.
    """
    errors = []
    by_name = {param.name: param for param in params}

    for param in params:
        if not param.optional and not _provided(parameters, param.name):
            errors.append(f"Missing required parameter: {param.name}")

    for name, value in parameters.items():
        param = by_name.get(name)
        if param is None:
            errors.append(f"Unknown parameter: {name}")
            continue

        if value is None:
            continue

        if param.type and not check_type(value, param.type):
            errors.append(f"Invalid type for parameter {name}: expected {param.type}")

        if base_type(param.type) == "enum" and param.values is not None:
            if value not in param.values:
                allowed = ", ".join(str(v) for v in param.values)
                errors.append(f"Invalid value for parameter {name}: must be one of [{allowed}]")

    return errors


class _Missing:
    """Marker for a parameter the caller did not provide."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def prepare_arguments(parameters: dict, params: Sequence[ParamDef]) -> list[Any]:
    """Order input values by declared param position, coercing boolean strings.

    Parameters the caller left out come back as ``MISSING``.
    """
    args = []
    for param in params:
        value = parameters.get(param.name)
        if value is None:
            args.append(MISSING)
            continue
        if isinstance(value, str) and base_type(param.type) == "boolean":
            value = value.lower() in TRUTHY_STRINGS
        args.append(value)
    return args


def fill_missing(
    args: Sequence[Any],
    handler: Callable,
    params: Sequence[ParamDef] = (),
) -> list[Any]:
    """Replace ``MISSING`` slots with the callable's own default.

    Falls back to the declared ``default_value``, then ``None``. Arguments
    stay positional in declared order, so a ``*args`` tail works too.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        signature = None

    defaults: list[Any] = []
    if signature is not None:
        for param in signature.parameters.values():
            if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
                break
            defaults.append(param.default)

    filled = []
    for index, value in enumerate(args):
        if value is MISSING:
            default = defaults[index] if index < len(defaults) else inspect.Parameter.empty
            if default is inspect.Parameter.empty:
                default = params[index].default_value if index < len(params) else None
            value = default
        filled.append(value)
    return filled
