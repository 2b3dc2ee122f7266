"""Format-neutral paragraph/run tree for a resume.

:func:`build_layout` turns :class:`ResumeData` into an ordered list of
:class:`ParagraphSpec`.  The DOCX and plain-text exporters both render this
tree, so section order, bullet handling and writing-style rules live in one
place.

Font sizes are half-points (``32`` is 16pt) and spacing is in twips
(1/20 pt), matching the units of WordprocessingML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from ..domain.models import ResumeData
from ..domain.resume_text import BULLET_GLYPH, content_lines

Alignment = Literal["left", "center"]

BLACK = "000000"

NAME_SIZE = 52
TITLE_SIZE = 36
CONTACT_SIZE = 32
HEADING_SIZE = 36
BODY_SIZE = 32

BULLET_PREFIX = f"{BULLET_GLYPH} "


@dataclass(frozen=True)
class RunSpec:
    text: str
    bold: bool = False
    italic: bool = False
    size: int = BODY_SIZE
    color: str = BLACK


@dataclass
class ParagraphSpec:
    runs: List[RunSpec] = field(default_factory=list)
    alignment: Alignment = "left"
    space_before: int = 0
    space_after: int = 0
    heading: bool = False
    bullet: bool = False
    role: str = "body"

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_layout(data: ResumeData) -> List[ParagraphSpec]:
    """Build the paragraph tree for *data*.

    Order: name, title/location, contact, summary, experience, projects,
    education, certifications, skills.  Empty sections are omitted.
    """
    paragraphs: List[ParagraphSpec] = []
    paragraphs.extend(_header(data))

    if data.summary.strip():
        paragraphs.append(_heading("PROFESSIONAL SUMMARY"))
        paragraphs.extend(_body(content_lines(data.summary, "paragraph"), "paragraph"))

    if data.work_experience:
        paragraphs.append(_heading("PROFESSIONAL EXPERIENCE"))
        for job in data.work_experience:
            title = " - ".join(p for p in (job.job_title, job.company) if p.strip())
            paragraphs.append(_entry_title(title))
            meta = _join(" | ", _date_range(job.start_date, job.end_date), job.location)
            if meta:
                paragraphs.append(_entry_meta(meta))
            paragraphs.extend(_body(content_lines(job.responsibilities, job.writing_style), job.writing_style))

    if data.projects:
        paragraphs.append(_heading("PROJECTS"))
        for project in data.projects:
            paragraphs.append(_entry_title(project.name))
            meta = _join(" | ", _date_range(project.start_date, project.end_date), project.url or "")
            if meta:
                paragraphs.append(_entry_meta(meta))
            if project.technologies:
                paragraphs.append(_entry_meta(f"Technologies: {', '.join(project.technologies)}"))
            paragraphs.extend(_body(content_lines(project.description, project.writing_style), project.writing_style))

    if data.education:
        paragraphs.append(_heading("EDUCATION"))
        for edu in data.education:
            paragraphs.append(_entry_title(_join(" / ", edu.degree, edu.institution, edu.graduation_year)))
            meta = _join(" | ", edu.location, f"GPA: {edu.gpa}" if edu.gpa else "")
            if meta:
                paragraphs.append(_entry_meta(meta))

    if data.courses_and_certifications:
        paragraphs.append(_heading("COURSES & CERTIFICATIONS"))
        for cert in data.courses_and_certifications:
            paragraphs.append(_entry_title(_join(" / ", cert.title, cert.issuer, cert.date)))
            paragraphs.extend(_body(content_lines(cert.description, cert.writing_style), cert.writing_style))

    if data.skills:
        paragraphs.append(_heading("SKILLS"))
        names = [s.name.strip() for s in data.skills if s.name.strip()]
        paragraphs.append(ParagraphSpec(runs=[RunSpec(", ".join(names))], space_after=120))

    return paragraphs


# ---------------------------------------------------------------------------
# Private builders
# ---------------------------------------------------------------------------


def _header(data: ResumeData) -> List[ParagraphSpec]:
    info = data.personal_info
    out: List[ParagraphSpec] = []
    if info.name.strip():
        out.append(
            ParagraphSpec(
                runs=[RunSpec(info.name.strip().upper(), bold=True, size=NAME_SIZE)],
                alignment="center",
                space_after=120,
                role="name",
            )
        )
    title_line = _join(" | ", info.job_title, info.location)
    if title_line:
        out.append(
            ParagraphSpec(
                runs=[RunSpec(title_line, italic=True, size=TITLE_SIZE)],
                alignment="center",
                space_after=120,
                role="title",
            )
        )
    contact = _join(" | ", info.email, info.phone, info.address, info.linkedin, info.github)
    if contact:
        out.append(
            ParagraphSpec(
                runs=[RunSpec(contact, size=CONTACT_SIZE)],
                alignment="center",
                space_after=240,
                role="contact",
            )
        )
    return out


def _heading(title: str) -> ParagraphSpec:
    return ParagraphSpec(
        runs=[RunSpec(title, bold=True, size=HEADING_SIZE)],
        space_before=240,
        space_after=120,
        heading=True,
        role="heading",
    )


def _entry_title(text: str) -> ParagraphSpec:
    return ParagraphSpec(runs=[RunSpec(text, bold=True)], space_before=120, space_after=40, role="entry")


def _entry_meta(text: str) -> ParagraphSpec:
    return ParagraphSpec(runs=[RunSpec(text, italic=True)], space_after=60, role="meta")


def _body(lines: List[str], writing_style: str) -> List[ParagraphSpec]:
    if writing_style == "paragraph":
        return [ParagraphSpec(runs=[RunSpec(line)], space_after=120) for line in lines]
    return [
        ParagraphSpec(runs=[RunSpec(BULLET_PREFIX + line)], space_after=60, bullet=True, role="bullet")
        for line in lines
    ]


def _date_range(start: str, end: str) -> str:
    if start.strip() and end.strip():
        return f"{start.strip()} - {end.strip()}"
    return start.strip() or end.strip()


def _join(sep: str, *parts: str) -> str:
    return sep.join(p.strip() for p in parts if p and p.strip())
