"""Base tool class for workspace tools."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..domain.models import ResumeData
from ..errors import InputValidationError


@dataclass
class ToolResult:
    """Result from a tool execution."""

    success: bool
    output: str
    error: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> str:
        if self.success:
            return self.output
        return f"Error: {self.error}\n{self.output}" if self.output else f"Error: {self.error}"


class BaseTool(ABC):
    """Base class for tools that work on resume files inside a workspace."""

    name: str
    description: str
    parameters: Dict[str, Any]

    def __init__(self, workspace_dir: str = "."):
        self.workspace_dir = Path(workspace_dir).resolve()

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with given parameters."""
        pass

    def to_schema(self) -> Dict[str, Any]:
        """Convert tool to a JSON function schema."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": self.parameters,
                    "required": [k for k, v in self.parameters.items() if v.get("required", False)],
                },
            },
        }

    def _resolve_path(self, path: str) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self.workspace_dir / p

    def _load_resume(self, path: str) -> ResumeData:
        """Read and validate a ResumeData JSON file from the workspace."""
        file_path = self._resolve_path(path)
        if not file_path.exists():
            raise InputValidationError(f"File not found: {path}")

        content = file_path.read_text(encoding="utf-8")
        if not content.strip():
            raise InputValidationError(f"File is empty: {path}")

        try:
            return ResumeData.model_validate(json.loads(content))
        except json.JSONDecodeError as e:
            raise InputValidationError(f"File is not valid JSON: {path} ({e.msg})") from e
        except ValidationError as e:
            raise InputValidationError(
                f"File is not a valid resume: {path} ({e.error_count()} error(s))"
            ) from e
