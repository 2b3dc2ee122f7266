"""Optimization planning for the "fix my resume" flow.

:func:`plan_optimizations` turns an analysis into a prioritized list of
fixes; :func:`apply_optimizations` applies the selected ones to a copy of
the resume.  Both are pure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Literal

from .ats_scorer import ATSAnalysisResult
from .models import ResumeData, Skill

Priority = Literal["critical", "important", "minor"]
Category = Literal["format", "content", "keywords", "structure"]

PRIORITY_ORDER = {"critical": 0, "important": 1, "minor": 2}

INDUSTRY_SKILLS: List[str] = [
    "Leadership",
    "Project Management",
    "Data Analysis",
    "Strategic Planning",
    "Team Collaboration",
]
MAX_ADDED_SKILLS = 3
ADDED_SKILL_LEVEL = 70
SUMMARY_TARGET_CHARS = 100

SUMMARY_TEMPLATE = (
    "Experienced {job_title} with proven expertise in delivering high-quality results "
    "and driving organizational success. Skilled in problem-solving, team collaboration, "
    "and strategic planning. Committed to continuous learning and professional development "
    "while contributing to team objectives and company growth."
)

_PASSIVE_OPENER = re.compile(r"^(\s*(?:[•\-*]\s*)?)responsible for\b", re.IGNORECASE)


@dataclass
class Optimization:
    """One suggested fix, toggled on or off by the user before applying."""

    id: str
    priority: Priority
    category: Category
    title: str
    description: str
    impact: int
    selected: bool = True
    preview: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "priority": self.priority,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "selected": self.selected,
            "preview": self.preview,
        }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def plan_optimizations(result: ATSAnalysisResult, data: ResumeData) -> List[Optimization]:
    """Derive the optimization list for *data* from its analysis *result*.

    Sorted by priority (critical first) then by impact, highest first.
    """
    plan: List[Optimization] = []

    if result.keyword_score < 60:
        plan.append(
            Optimization(
                id="keywords",
                priority="critical",
                category="keywords",
                title="Add industry-relevant keywords",
                description="Your resume lacks keywords that ATS systems look for.",
                impact=25,
                preview="Adds skills such as: " + ", ".join(_missing_skills(data)),
            )
        )

    if result.content_score < 60:
        plan.append(
            Optimization(
                id="content",
                priority="critical",
                category="content",
                title="Strengthen experience descriptions",
                description="Replace passive phrasing with action-oriented statements.",
                impact=20,
                preview="'Responsible for' becomes 'Led and managed'",
            )
        )

    if result.structure_score < 80:
        plan.append(
            Optimization(
                id="structure",
                priority="important",
                category="structure",
                title="Improve resume structure",
                description="Fill in the standard sections ATS parsers expect.",
                impact=15,
                preview="Adds a professional summary when it is missing",
            )
        )

    if len(data.summary.strip()) < SUMMARY_TARGET_CHARS:
        plan.append(
            Optimization(
                id="summary",
                priority="important",
                category="structure",
                title="Write a stronger professional summary",
                description="A summary of 150-300 words gives recruiters and ATS systems context.",
                impact=18,
                preview=_summary_for(data)[:120] + "...",
            )
        )

    plan.append(
        Optimization(
            id="format",
            priority="minor",
            category="format",
            title="Optimize formatting for ATS",
            description="Use a simple single-column layout and standard section headings.",
            impact=10,
            selected=False,
            preview="Formatting is already handled by the export templates",
        )
    )

    plan.sort(key=lambda o: (PRIORITY_ORDER[o.priority], -o.impact))
    return plan


def apply_optimizations(data: ResumeData, optimizations: Iterable[Optimization]) -> ResumeData:
    """Return a copy of *data* with every selected optimization applied."""
    updated = data.model_copy(deep=True)
    for opt in optimizations:
        if not opt.selected:
            continue
        if opt.category == "keywords":
            updated = _add_skills(updated)
        elif opt.category == "content":
            updated = _strengthen_responsibilities(updated)
        elif opt.category == "structure":
            updated = _fill_summary(updated)
        # format: rendering concern, nothing to change in the data
    return updated


def select(optimizations: List[Optimization], ids: Iterable[str]) -> List[Optimization]:
    """Mark exactly the optimizations named in *ids* as selected."""
    wanted = set(ids)
    return [
        Optimization(**{**opt.to_dict(), "selected": opt.id in wanted})
        for opt in optimizations
    ]


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _missing_skills(data: ResumeData) -> List[str]:
    have = {s.name.strip().lower() for s in data.skills}
    return [name for name in INDUSTRY_SKILLS if name.lower() not in have][:MAX_ADDED_SKILLS]


def _add_skills(data: ResumeData) -> ResumeData:
    added = [Skill(name=name, level=ADDED_SKILL_LEVEL) for name in _missing_skills(data)]
    if not added:
        return data
    return data.model_copy(update={"skills": list(data.skills) + added})


def _strengthen_responsibilities(data: ResumeData) -> ResumeData:
    jobs = []
    for job in data.work_experience:
        rewritten = [_PASSIVE_OPENER.sub(r"\1Led and managed", r) for r in job.responsibilities]
        jobs.append(job.model_copy(update={"responsibilities": rewritten}))
    return data.model_copy(update={"work_experience": jobs})


def _fill_summary(data: ResumeData) -> ResumeData:
    if len(data.summary.strip()) >= SUMMARY_TARGET_CHARS:
        return data
    return data.model_copy(update={"summary": _summary_for(data)})


def _summary_for(data: ResumeData) -> str:
    job_title = data.personal_info.job_title.strip() or "professional"
    return SUMMARY_TEMPLATE.format(job_title=job_title)
