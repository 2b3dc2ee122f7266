"""Plain-text rendering of the resume layout tree."""

from __future__ import annotations

from typing import List

from ..domain.models import ResumeData
from .layout import ParagraphSpec, build_layout


def render_text(data: ResumeData) -> str:
    """Return *data* as plain text: one line per field, headings on their own line."""
    return render_layout(build_layout(data))


def render_layout(paragraphs: List[ParagraphSpec]) -> str:
    lines: List[str] = []
    for spec in paragraphs:
        if spec.heading and lines:
            lines.append("")
        lines.append(spec.text)
    return "\n".join(lines) + "\n"
