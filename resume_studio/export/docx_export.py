"""DOCX rendering of the resume layout tree with python-docx."""

from __future__ import annotations

import io
import logging
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips

from ..domain.models import ResumeData
from .layout import ParagraphSpec, build_layout

logger = logging.getLogger(__name__)

FONT_NAME = "Times New Roman"
MARGIN = Inches(0.5)

_AFTER_PBDR = (
    "w:shd",
    "w:tabs",
    "w:suppressAutoHyphens",
    "w:kinsoku",
    "w:wordWrap",
    "w:overflowPunct",
    "w:topLinePunct",
    "w:autoSpaceDE",
    "w:autoSpaceDN",
    "w:bidi",
    "w:adjustRightInd",
    "w:snapToGrid",
    "w:spacing",
    "w:ind",
    "w:contextualSpacing",
    "w:mirrorIndents",
    "w:suppressOverlap",
    "w:jc",
    "w:textDirection",
    "w:textAlignment",
    "w:textboxTightWrap",
    "w:outlineLvl",
    "w:divId",
    "w:cnfStyle",
    "w:rPr",
    "w:sectPr",
    "w:pPrChange",
)

_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
}


def render_docx(data: ResumeData) -> bytes:
    """Return the DOCX bytes for *data*."""
    return render_layout(build_layout(data))


def render_layout(paragraphs: List[ParagraphSpec]) -> bytes:
    document = Document()
    _apply_page_setup(document)

    for spec in paragraphs:
        paragraph = document.add_paragraph()
        paragraph.alignment = _ALIGNMENTS[spec.alignment]
        fmt = paragraph.paragraph_format
        fmt.space_before = Twips(spec.space_before)
        fmt.space_after = Twips(spec.space_after)
        for run_spec in spec.runs:
            run = paragraph.add_run(run_spec.text)
            run.bold = run_spec.bold
            run.italic = run_spec.italic
            run.font.name = FONT_NAME
            run.font.size = Pt(run_spec.size / 2)
            run.font.color.rgb = RGBColor.from_string(run_spec.color)
        if spec.heading:
            _add_bottom_border(paragraph)

    buffer = io.BytesIO()
    document.save(buffer)
    logger.debug("Rendered DOCX with %d paragraphs", len(paragraphs))
    return buffer.getvalue()


def _apply_page_setup(document) -> None:
    style = document.styles["Normal"]
    style.font.name = FONT_NAME
    # East Asian fallback font must be set on the raw rFonts element.
    style.element.rPr.rFonts.set(qn("w:eastAsia"), FONT_NAME)
    style.font.color.rgb = RGBColor(0, 0, 0)

    for section in document.sections:
        section.top_margin = MARGIN
        section.bottom_margin = MARGIN
        section.left_margin = MARGIN
        section.right_margin = MARGIN


def _add_bottom_border(paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    borders.append(bottom)
    # pBdr must precede spacing and jc inside pPr.
    p_pr.insert_element_before(borders, *_AFTER_PBDR)
