"""Prompt catalog: prompt id -> PromptDef."""

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from .loader import load_prompts
from .schema import PromptDef


class PromptCatalog:
    """Static collection of prompts. Later ids replace earlier ones."""

    def __init__(self, prompts: Iterable[PromptDef] = ()):
        self._prompts: dict[str, PromptDef] = {}
        for prompt in prompts:
            self._prompts[prompt.id] = prompt

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "PromptCatalog":
        return cls(load_prompts(directory))

    @classmethod
    def from_dicts(cls, records: Iterable[dict[str, Any]]) -> "PromptCatalog":
        return cls(PromptDef.from_dict(r) for r in records)

    def get(self, prompt_id: str) -> Optional[PromptDef]:
        return self._prompts.get(prompt_id)

    def get_available_prompts(self) -> list[str]:
        return list(self._prompts)

    def get_prompts_by_category(self, category: str) -> list[PromptDef]:
        return [p for p in self._prompts.values() if p.category == category]

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._prompts

    def __len__(self) -> int:
        return len(self._prompts)
