"""Build tool descriptors from Python callables.

Inspects signatures, type annotations and Google-style docstrings so tool
modules can stay plain Python functions. The ``@tool`` decorator covers the
metadata a signature cannot express (visibility, examples, a public name).
"""

import inspect
import re
from types import ModuleType
from typing import Any, Callable, Literal, Optional, Union, get_args, get_origin, get_type_hints

from .schema import VISIBILITIES, ParamDef, ReturnDef, ToolDescriptor

_TOOL_ATTR = "__tooldeck__"

_TYPE_MAP = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
    tuple: "array",
    set: "array",
    type(None): "null",
}

_SECTION_RE = re.compile(r"^(Args|Arguments|Parameters|Returns|Return|Examples|Example):\s*$")
_ARG_RE = re.compile(r"^(\*{0,2}\w+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")


def tool(
    fn: Optional[Callable] = None,
    *,
    name: Optional[str] = None,
    visibility: Optional[str] = None,
    examples: Optional[list[str]] = None,
    module: Optional[str] = None,
):
    """Mark a function as a tool and attach metadata its signature can't carry.

    Usage:
        @tool
        def add_site(name: str) -> dict: ...

        @tool(visibility="private", examples=["run --commands 'a; b'"])
        async def run(commands: str) -> None: ...
    """
    if visibility is not None and visibility not in VISIBILITIES:
        raise ValueError(
            f"Unknown visibility '{visibility}'. Use one of: {', '.join(VISIBILITIES)}"
        )

    def decorator(func: Callable) -> Callable:
        setattr(func, _TOOL_ATTR, {
            "name": name,
            "visibility": visibility,
            "examples": tuple(examples or ()),
            "module": module,
        })
        return func

    if fn is not None:
        return decorator(fn)
    return decorator


def annotation_to_type(annotation: Any) -> tuple[str, Optional[tuple]]:
    """Map a Python annotation to a descriptor type name and enum values."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return "any", None

    simple = _TYPE_MAP.get(annotation)
    if simple:
        return simple, None

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Literal:
        # Only all-string choices become an enum
        if all(isinstance(a, str) for a in args):
            return "enum", tuple(args)
        if all(isinstance(a, bool) for a in args):
            return "boolean", None
        if all(isinstance(a, (int, float)) and not isinstance(a, bool) for a in args):
            return "number", None
        return "any", None

    if origin is Union:
        inner = [a for a in args if a is not type(None)]
        if len(inner) == 1:
            return annotation_to_type(inner[0])
        return "any", None

    if origin in (list, tuple, set):
        return "array", None

    if origin is dict:
        return "object", None

    return "any", None


def _split_docstring(doc: str) -> tuple[str, dict[str, list[str]]]:
    """Split a docstring into its summary text and named sections."""
    summary: list[str] = []
    sections: dict[str, list[str]] = {}
    current: Optional[list[str]] = None

    for line in doc.splitlines():
        header = _SECTION_RE.match(line.strip())
        if header and not line.startswith((" ", "\t")):
            key = header.group(1).lower()
            key = {"arguments": "args", "parameters": "args", "return": "returns", "example": "examples"}.get(key, key)
            current = sections.setdefault(key, [])
            continue
        if current is None:
            summary.append(line)
        else:
            current.append(line)

    text = "\n".join(summary).strip()
    # Collapse to the first paragraph's lines joined by spaces
    paragraph = text.split("\n\n")[0] if text else ""
    return " ".join(part.strip() for part in paragraph.splitlines()), sections


def _parse_args_section(lines: list[str]) -> dict[str, str]:
    """Parse ``name: description`` entries with indented continuation lines."""
    descriptions: dict[str, str] = {}
    last: Optional[str] = None
    base_indent: Optional[int] = None

    for line in lines:
        if not line.strip():
            continue
        indent = len(line) - len(line.lstrip())
        if base_indent is None:
            base_indent = indent
        match = _ARG_RE.match(line.strip())
        if indent <= base_indent and match:
            last = match.group(1).lstrip("*")
            descriptions[last] = match.group(3).strip()
        elif last is not None:
            descriptions[last] = f"{descriptions[last]} {line.strip()}".strip()

    return descriptions


def _parse_returns_section(lines: list[str], annotation: Any) -> Optional[ReturnDef]:
    text = " ".join(line.strip() for line in lines if line.strip())
    if annotation is inspect.Signature.empty or annotation is None or annotation is type(None):
        type_name = None
    else:
        type_name = annotation_to_type(annotation)[0]

    match = re.match(r"^(\w[\w\[\], ]*):\s*(.*)$", text)
    if match and type_name is None:
        type_name, text = match.group(1), match.group(2)

    if not text and type_name in (None, "any"):
        return None
    return ReturnDef(type=type_name or "any", description=text)


def describe_callable(fn: Callable, module: str = "") -> ToolDescriptor:
    """Build a ToolDescriptor from a callable's signature and docstring.

    Args:
        fn: The callable to introspect.
        module: Grouping label for the tool (CLI group, prompt expansion).

    Returns:
        A descriptor whose params follow the callable's positional order.
    """
    meta = getattr(fn, _TOOL_ATTR, {})
    sig = inspect.signature(fn)
    doc = inspect.getdoc(fn) or ""
    summary, sections = _split_docstring(doc)
    arg_docs = _parse_args_section(sections.get("args", []))

    try:
        hints = get_type_hints(fn)
    except Exception:
        hints = {}

    params = []
    for param_name, param in sig.parameters.items():
        if param_name in ("self", "cls"):
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue

        type_name, values = annotation_to_type(hints.get(param_name, param.annotation))
        has_default = param.default is not inspect.Parameter.empty
        params.append(ParamDef(
            name=param_name,
            type=type_name,
            description=arg_docs.get(param_name, ""),
            optional=has_default,
            default_value=param.default if has_default and param.default is not None else None,
            values=values,
        ))

    examples = tuple(meta.get("examples") or ()) or tuple(
        line.strip() for line in sections.get("examples", []) if line.strip()
    )

    return ToolDescriptor(
        name=meta.get("name") or fn.__name__,
        module=meta.get("module") or module,
        description=summary,
        params=tuple(params),
        examples=examples,
        returns=_parse_returns_section(sections.get("returns", []), hints.get("return", sig.return_annotation)),
        visibility=meta.get("visibility"),
    )


def module_label(module: ModuleType) -> str:
    """Return the grouping label for a tool module."""
    label = getattr(module, "TOOL_MODULE", None)
    if label:
        return str(label)
    return module.__name__.rsplit(".", 1)[-1]


def collect_module_tools(
    module: ModuleType,
    label: Optional[str] = None,
) -> list[tuple[Callable, ToolDescriptor]]:
    """Collect (callable, descriptor) pairs for the public functions of a module.

    Only functions defined in the module itself count; ``__all__`` narrows
    the set when present. Definition order is preserved.
    """
    label = label or module_label(module)
    exported = getattr(module, "__all__", None)

    pairs = []
    for attr_name, obj in vars(module).items():
        if attr_name.startswith("_") or not inspect.isfunction(obj):
            continue
        if obj.__module__ != module.__name__:
            continue
        if exported is not None and attr_name not in exported:
            continue
        pairs.append((obj, describe_callable(obj, module=label)))
    return pairs
