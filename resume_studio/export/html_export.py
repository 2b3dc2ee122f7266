"""Static HTML rendering of a resume.

The same markup backs the HTML download and the PDF preview, so it sticks
to the CSS subset PyMuPDF's Story layout understands.
"""

from __future__ import annotations

from html import escape
from typing import List

from ..domain.models import ResumeData
from .layout import BULLET_PREFIX, ParagraphSpec, build_layout

RESUME_CSS = """
        body { font-family: "Times New Roman", serif; color: #000000; font-size: 11pt; line-height: 1.35; }
        .resume-container { margin: 0; padding: 0; }
        h1 { font-size: 20pt; text-align: center; margin: 0 0 4pt 0; }
        .title { font-size: 13pt; font-style: italic; text-align: center; margin: 0 0 4pt 0; }
        .contact { font-size: 11pt; text-align: center; margin: 0 0 10pt 0; }
        h2 { font-size: 13pt; margin: 12pt 0 4pt 0; border-bottom: 1px solid #000000; }
        .entry { font-weight: bold; margin: 6pt 0 2pt 0; }
        .meta { font-style: italic; margin: 0 0 2pt 0; }
        ul { margin: 0 0 4pt 14pt; padding: 0; }
        li { margin: 0 0 2pt 0; }
        p { margin: 0 0 4pt 0; }
        .watermark { color: #c8c8c8; font-size: 9pt; text-align: center; margin-top: 12pt; }
"""

_TAGS = {
    "name": ("h1", ""),
    "title": ("p", "title"),
    "contact": ("p", "contact"),
    "heading": ("h2", ""),
    "entry": ("p", "entry"),
    "meta": ("p", "meta"),
    "body": ("p", ""),
}


def render_html(data: ResumeData) -> str:
    """Return a self-contained HTML document for *data*; all user text is escaped."""
    return render_document(render_body(build_layout(data)), data.personal_info.name.strip() or "Resume")


def render_document(body: str, title: str) -> str:
    """Wrap pre-rendered *body* markup in a standalone HTML page."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"    <title>{escape(title)}</title>\n"
        "    <style>\n"
        f"{RESUME_CSS}\n"
        "    </style>\n"
        "</head>\n"
        "<body>\n"
        '    <div class="resume-container">\n'
        f"{body}\n"
        "    </div>\n"
        "</body>\n"
        "</html>\n"
    )


def render_body(paragraphs: List[ParagraphSpec]) -> str:
    out: List[str] = []
    in_list = False
    for spec in paragraphs:
        if spec.bullet:
            if not in_list:
                out.append("        <ul>")
                in_list = True
            out.append(f"            <li>{escape(spec.text[len(BULLET_PREFIX):])}</li>")
            continue
        if in_list:
            out.append("        </ul>")
            in_list = False
        tag, css_class = _TAGS.get(spec.role, ("p", ""))
        attr = f' class="{css_class}"' if css_class else ""
        out.append(f"        <{tag}{attr}>{escape(spec.text)}</{tag}>")
    if in_list:
        out.append("        </ul>")
    return "\n".join(out)
