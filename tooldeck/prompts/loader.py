"""Load prompt definitions from markdown files with YAML front matter.

Expected file format::

    ---
    id: developer
    title: Developer Context
    depends:
      - system
      - any: [react, vue]
    tools: [site, component]
    ---
    You are helping a developer...

The id defaults to the file stem. Files without front matter are skipped.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .schema import PromptDef

_log = logging.getLogger(__name__)


def parse_front_matter(text: str) -> tuple[Optional[dict[str, Any]], str]:
    """Split ``text`` into its front matter dict and the remaining content.

    Returns ``(None, text)`` when there is no front matter or it fails to
    parse.
    """
    if not text or not text.lstrip().startswith("---"):
        return None, text

    stripped = text.lstrip()
    end = stripped.find("\n---", 3)
    if end == -1:
        return None, text

    header = stripped[3:end]
    body = stripped[end + 4:]
    # Drop the rest of the closing delimiter line
    newline = body.find("\n")
    body = body[newline + 1:] if newline != -1 else ""

    try:
        data = yaml.safe_load(header) or {}
    except yaml.YAMLError as e:
        _log.error("Error parsing front matter: %s", e)
        return None, text

    if not isinstance(data, dict):
        _log.error("Front matter must be a mapping, got %s", type(data).__name__)
        return None, text

    return data, body.strip()


def load_prompt_file(path: Union[str, Path]) -> Optional[PromptDef]:
    """Read one prompt file. Returns None if it has no usable front matter."""
    path = Path(path)
    front_matter, content = parse_front_matter(path.read_text(encoding="utf-8"))
    if front_matter is None:
        return None

    record = {**front_matter, "content": content, "filePath": path.name}
    record.setdefault("id", path.stem)
    return PromptDef.from_dict(record)


def load_prompts(directory: Union[str, Path]) -> list[PromptDef]:
    """Load every ``*.md`` prompt in a directory, sorted by file name."""
    directory = Path(directory).expanduser()
    if not directory.is_dir():
        _log.info("No prompts directory at %s", directory)
        return []

    prompts = []
    for path in sorted(directory.glob("*.md")):
        if not path.is_file():
            continue
        try:
            prompt = load_prompt_file(path)
        except OSError as e:
            _log.error("Error reading prompt file %s: %s", path.name, e)
            continue
        if prompt is None:
            _log.debug("Skipping %s: no front matter", path.name)
            continue
        prompts.append(prompt)

    _log.debug("Loaded %d prompts from %s", len(prompts), directory)
    return prompts
