"""Resume Studio Export - render :class:`ResumeData` into downloadable documents.

Every exporter returns bytes; :func:`export_resume` wraps them in an
:class:`ExportArtifact` with a filename and MIME type.  Delivery (HTTP
response, file write) belongs to the caller.
"""

from .artifacts import MIME_TYPES, SUPPORTED_FORMATS, ExportArtifact, export_resume, preview_surface_for
from .docx_export import render_docx
from .filenames import generate_filename, sanitize_name
from .html_export import render_html
from .layout import ParagraphSpec, RunSpec, build_layout
from .pdf_export import Rasterizer, StoryRasterizer, export_pdf, fit_to_page
from .preview import PreviewElement, PreviewSurface, find_preview, hidden_overlays, render_preview
from .text_export import render_text

__all__ = [
    "export_resume",
    "ExportArtifact",
    "MIME_TYPES",
    "SUPPORTED_FORMATS",
    "preview_surface_for",
    "generate_filename",
    "sanitize_name",
    "build_layout",
    "ParagraphSpec",
    "RunSpec",
    "render_docx",
    "render_html",
    "render_text",
    "export_pdf",
    "fit_to_page",
    "Rasterizer",
    "StoryRasterizer",
    "PreviewSurface",
    "PreviewElement",
    "find_preview",
    "hidden_overlays",
    "render_preview",
]
