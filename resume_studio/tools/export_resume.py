"""Resume export tool - write a resume JSON file out as PDF, DOCX, HTML or text."""

from __future__ import annotations

from typing import Optional

from ..errors import StudioError
from ..export import SUPPORTED_FORMATS, export_resume
from ..export.pdf_export import Rasterizer
from .base import BaseTool, ToolResult


class ExportResumeTool(BaseTool):
    """Export a resume JSON file to a document in the workspace."""

    name = "export_resume"
    description = """Export a resume JSON file to a document.
Supported formats: .pdf, .docx, .html, .txt (the output path suffix selects the format)."""
    parameters = {
        "path": {
            "type": "string",
            "description": "Path to the resume JSON file",
            "required": True,
        },
        "output_path": {
            "type": "string",
            "description": "Output file path (extension determines format)",
            "required": True,
        },
    }

    def __init__(self, workspace_dir: str = ".", rasterizer: Optional[Rasterizer] = None):
        super().__init__(workspace_dir)
        self.rasterizer = rasterizer

    async def execute(self, path: str, output_path: str) -> ToolResult:
        out_path = self._resolve_path(output_path)
        fmt = out_path.suffix.lower().lstrip(".")
        if fmt not in SUPPORTED_FORMATS:
            return ToolResult(
                success=False,
                output="",
                error=f"Unsupported output format: .{fmt}. Supported: "
                + ", ".join(f".{f}" for f in SUPPORTED_FORMATS),
            )

        try:
            data = self._load_resume(path)
            artifact = export_resume(data, fmt, rasterizer=self.rasterizer)
        except StudioError as e:
            return ToolResult(success=False, output="", error=e.message, data={"code": e.code})

        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(artifact.content)

        return ToolResult(
            success=True,
            output=f"Successfully exported resume to {output_path} ({artifact.size} bytes)",
            data={
                "path": str(out_path),
                "format": fmt,
                "size": artifact.size,
                "download_name": artifact.filename,
                "mime_type": artifact.mime_type,
            },
        )
