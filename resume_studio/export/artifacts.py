"""Export dispatch: one entry point for every downloadable format."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Optional

from ..domain.models import ResumeData
from ..errors import UnsupportedFormatError
from .docx_export import render_docx
from .filenames import generate_filename
from .html_export import render_html
from .pdf_export import Rasterizer, export_pdf
from .preview import PreviewSurface, render_preview
from .text_export import render_text

logger = logging.getLogger(__name__)

MIME_TYPES: Dict[str, str] = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "html": "text/html; charset=utf-8",
    "txt": "text/plain; charset=utf-8",
}

SUPPORTED_FORMATS = tuple(MIME_TYPES)

PREVIEW_ELEMENT_ID = "resume-preview"


@dataclass(frozen=True)
class ExportArtifact:
    """Exported bytes plus what a caller needs to deliver them."""

    filename: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def export_resume(
    data: ResumeData,
    fmt: str,
    surface: Optional[PreviewSurface] = None,
    rasterizer: Optional[Rasterizer] = None,
    watermark: Optional[str] = None,
    today: Optional[date] = None,
) -> ExportArtifact:
    """Export *data* as *fmt* (``pdf``, ``docx``, ``html`` or ``txt``).

    PDF exports rasterize the preview mounted on *surface*; without one, a
    preview is rendered from *data* and mounted on a fresh surface.
    """
    fmt = (fmt or "").lower().lstrip(".")
    renderers: Dict[str, Callable[[], bytes]] = {
        "pdf": lambda: export_pdf(surface or preview_surface_for(data, watermark), rasterizer),
        "docx": lambda: render_docx(data),
        "html": lambda: render_html(data).encode("utf-8"),
        "txt": lambda: render_text(data).encode("utf-8"),
    }
    if fmt not in renderers:
        raise UnsupportedFormatError(
            f"Unsupported export format: {fmt or '(none)'}",
            details={"supported": list(SUPPORTED_FORMATS)},
        )

    content = renderers[fmt]()
    artifact = ExportArtifact(
        filename=generate_filename(data, fmt, today=today),
        mime_type=MIME_TYPES[fmt],
        content=content,
    )
    logger.info("Exported resume format=%s filename=%s bytes=%d", fmt, artifact.filename, artifact.size)
    return artifact


def preview_surface_for(data: ResumeData, watermark: Optional[str] = None) -> PreviewSurface:
    surface = PreviewSurface()
    surface.mount(PREVIEW_ELEMENT_ID, render_preview(data, watermark=watermark))
    return surface
