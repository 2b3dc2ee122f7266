"""Flattening and line-splitting helpers for resume content.

Pure functions on :class:`ResumeData` and strings -- no I/O.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Union

from .models import ResumeData, non_blank

BULLET_GLYPH = "•"

# Glyphs users paste in front of bullet lines. Hyphens and asterisks count
# only when followed by a space, so "-20%" keeps its sign.
_LEADING_BULLET = re.compile(r"^\s*(?:(?:[•▪●◦‣⁃]|[*\-](?=\s|$))\s*)+")


def strip_bullet(line: str) -> str:
    """Remove any leading bullet glyph(s) and surrounding whitespace."""
    return _LEADING_BULLET.sub("", line).strip()


def split_bullets(text: str) -> List[str]:
    """Split free text on newlines and inline bullet glyphs."""
    parts = re.split(r"[\n•]", text or "")
    cleaned = [strip_bullet(p) for p in parts]
    return [p for p in cleaned if p]


def content_lines(source: Union[str, Iterable[str]], writing_style: str = "bullet") -> List[str]:
    """Normalize a multi-line field for rendering.

    ``bullet`` yields one stripped entry per line; ``paragraph`` joins the
    lines into a single flowing paragraph (empty list when nothing is left).
    """
    if isinstance(source, str):
        lines = split_bullets(source)
    else:
        lines = []
        for entry in non_blank(source):
            lines.extend(split_bullets(entry))

    if writing_style == "paragraph":
        joined = " ".join(lines)
        return [joined] if joined else []
    return lines


def build_resume_text(data: ResumeData) -> str:
    """Render *data* as labelled plain text for scoring and remote analysis."""
    info = data.personal_info
    parts: List[str] = [
        f"Name: {info.name}",
        f"Email: {info.email}",
        f"Phone: {info.phone}",
        f"Location: {info.location}",
        f"Title: {info.job_title}",
        "",
    ]

    if data.summary.strip():
        parts.extend(["Professional Summary:", data.summary.strip(), ""])

    if data.work_experience:
        parts.append("Work Experience:")
        for job in data.work_experience:
            parts.append(f"{job.job_title} at {job.company} ({job.start_date} - {job.end_date})")
            if job.location:
                parts.append(f"Location: {job.location}")
            for line in content_lines(job.responsibilities):
                parts.append(f"{BULLET_GLYPH} {line}")
            parts.append("")

    if data.projects:
        parts.append("Projects:")
        for project in data.projects:
            parts.append(project.name)
            if project.technologies:
                parts.append(f"Technologies: {', '.join(project.technologies)}")
            for line in content_lines(project.description):
                parts.append(f"{BULLET_GLYPH} {line}")
            parts.append("")

    if data.education:
        parts.append("Education:")
        for edu in data.education:
            parts.append(f"{edu.degree} from {edu.institution} ({edu.graduation_year})")
            parts.append("")

    if data.skills:
        parts.append("Skills:")
        for skill in data.skills:
            parts.append(f"{BULLET_GLYPH} {skill.name} (Level: {skill.level or 'Not specified'})")
        parts.append("")

    if data.courses_and_certifications:
        parts.append("Courses and Certifications:")
        for cert in data.courses_and_certifications:
            parts.append(f"{BULLET_GLYPH} {cert.title}")
            if cert.description:
                parts.append(f"  {cert.description}")

    return "\n".join(parts).strip()


def body_text(data: ResumeData) -> str:
    """Return only user-authored prose (summary, bullets, skills, projects).

    Labels such as "Name:" are excluded so keyword and gibberish checks see
    what the candidate actually wrote.
    """
    chunks: List[str] = [data.personal_info.job_title, data.summary]
    for job in data.work_experience:
        chunks.append(job.job_title)
        chunks.extend(non_blank(job.responsibilities))
    for project in data.projects:
        chunks.extend([project.name, project.description, " ".join(project.technologies)])
    chunks.extend(skill.name for skill in data.skills)
    for cert in data.courses_and_certifications:
        chunks.extend([cert.title, cert.description])
    return " ".join(c.strip() for c in chunks if c and c.strip())


def experience_text(data: ResumeData) -> str:
    """Job titles, companies and bullets, one job per block."""
    blocks: List[str] = []
    for job in data.work_experience:
        heading = " at ".join(part for part in (job.job_title, job.company) if part.strip())
        lines = [heading] if heading else []
        lines.extend(content_lines(job.responsibilities))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
