"""Error taxonomy shared by the tool registry and the prompt builder.

Tool errors carry a machine-readable ``code`` so callers can branch on
validation vs execution failures without parsing messages.
"""

import json
from typing import Any, Optional

UNKNOWN_TOOL = "UNKNOWN_TOOL"
PARAMETER_VALIDATION_FAILED = "PARAMETER_VALIDATION_FAILED"
TOOL_EXECUTION_FAILED = "TOOL_EXECUTION_FAILED"


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


class ToolError(Exception):
    """Base class for tool-related errors."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code: Optional[str] = details.get("code")
        self.cause: Optional[BaseException] = details.get("cause")

    def to_dict(self) -> dict:
        """Return a JSON-friendly summary of the error."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "code": self.code,
        }


class ToolValidationError(ToolError):
    """Raised when a tool is unknown or its parameters fail validation."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message, **details)
        self.tool_name: Optional[str] = details.get("tool_name")
        self.parameters: Optional[dict] = details.get("parameters")
        self.validation_errors: Optional[list[str]] = details.get("validation_errors")

    def describe(self) -> str:
        return "\n".join([
            f"ToolValidationError: {self.message}",
            f"  Tool: {self.tool_name}",
            f"  Parameters: {_to_json(self.parameters)}",
            f"  Validation Errors: {_to_json(self.validation_errors)}",
            f"  Code: {self.code}",
        ])

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["tool"] = self.tool_name
        if self.validation_errors:
            data["validationErrors"] = list(self.validation_errors)
        return data


class ToolExecutionError(ToolError):
    """Raised when a tool callable fails. The original error is kept as ``cause``."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message, **details)
        self.tool_name: Optional[str] = details.get("tool_name")
        self.parameters: Optional[dict] = details.get("parameters")

    def describe(self) -> str:
        cause = type(self.cause).__name__ if self.cause is not None else "Unknown"
        return "\n".join([
            f"ToolExecutionError: {self.message}",
            f"  Tool: {self.tool_name}",
            f"  Cause: {cause}",
            f"  Parameters: {_to_json(self.parameters)}",
            f"  Code: {self.code}",
        ])

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["tool"] = self.tool_name
        return data


class PromptError(Exception):
    """Base class for prompt composition errors."""

    def __init__(self, message: str, prompt_id: str):
        super().__init__(message)
        self.prompt_id = prompt_id


class PromptNotFoundError(PromptError):
    """The requested root prompt does not exist."""

    def __init__(self, prompt_id: str):
        super().__init__(f'Prompt with ID "{prompt_id}" not found', prompt_id)


class CircularDependencyError(PromptError):
    """A prompt is reachable from itself along one dependency path."""

    def __init__(self, prompt_id: str):
        super().__init__(
            f'Circular dependency detected involving prompt "{prompt_id}"',
            prompt_id,
        )
