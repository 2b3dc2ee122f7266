"""Resume Studio Tools - workspace tools that score and export resume files."""

from .ats_scorer import ATSScorerTool
from .base import BaseTool, ToolResult
from .export_resume import ExportResumeTool

__all__ = [
    "BaseTool",
    "ToolResult",
    "ATSScorerTool",
    "ExportResumeTool",
]
