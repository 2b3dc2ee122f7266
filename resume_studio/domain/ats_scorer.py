"""Pure domain logic for ATS (Applicant Tracking System) resume scoring.

Scores are heuristic and fully deterministic: the same :class:`ResumeData`
always produces the same :class:`ATSAnalysisResult`.  Nothing here performs
I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..errors import InputValidationError
from .job_matcher import match_keywords, unmet_requirements
from .models import ResumeData, non_blank
from .resume_text import body_text, build_resume_text

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

WEAK_THRESHOLD = 70

PROFESSIONAL_KEYWORDS: List[str] = [
    "leadership",
    "management",
    "stakeholder",
    "agile",
    "strategic",
    "development",
    "analysis",
    "optimization",
    "collaboration",
    "communication",
    "problem-solving",
    "project",
    "performance",
    "innovation",
    "cross-functional",
    "budget",
    "mentor",
    "process improvement",
    "data-driven",
    "results",
]

INDUSTRY_TRIGGERS: Dict[str, List[str]] = {
    "technology": ["software", "developer", "engineer", "programmer", "devops", "python", "javascript", "cloud"],
    "finance": ["accountant", "finance", "financial", "audit", "banking", "gaap", "tax", "controller"],
    "healthcare": ["nurse", "clinical", "patient", "medical", "health", "hospital", "pharmacy"],
    "marketing": ["marketing", "brand", "seo", "campaign", "social media", "copywriter"],
    "sales": ["sales", "account executive", "business development", "retail"],
    "education": ["teacher", "tutor", "instructor", "professor", "curriculum"],
}

INDUSTRY_KEYWORDS: Dict[str, List[str]] = {
    "technology": [
        "api",
        "architecture",
        "automation",
        "cloud",
        "database",
        "deployment",
        "microservices",
        "scalable",
        "security",
        "testing",
    ],
    "finance": [
        "audit",
        "budgeting",
        "compliance",
        "forecasting",
        "gaap",
        "modeling",
        "reconciliation",
        "reporting",
        "risk",
        "valuation",
    ],
    "healthcare": [
        "care coordination",
        "clinical",
        "compliance",
        "diagnosis",
        "documentation",
        "ehr",
        "hipaa",
        "patient care",
        "safety",
        "treatment",
    ],
    "marketing": [
        "analytics",
        "brand",
        "campaign",
        "content strategy",
        "conversion",
        "engagement",
        "market research",
        "roi",
        "segmentation",
        "seo",
    ],
    "sales": [
        "client relationships",
        "closing",
        "crm",
        "forecast",
        "negotiation",
        "pipeline",
        "prospecting",
        "quota",
        "revenue",
        "territory",
    ],
    "education": [
        "assessment",
        "classroom management",
        "curriculum",
        "differentiated",
        "instruction",
        "lesson planning",
        "literacy",
        "mentoring",
        "pedagogy",
        "student engagement",
    ],
}

# Distinct keyword hits needed for a full keyword score.
KEYWORD_TARGET = 10
SKILLS_BONUS = 15
MIN_SKILLS = 5
OVERUSE_LIMIT = 10
OVERUSE_PENALTY = 25

SUMMARY_MIN_CHARS = 50
MIN_UNIQUE_WORDS = 30
GIBBERISH_KEYWORD_CAP = 20
GIBBERISH_CONTENT_PENALTY = 30
VOWELLESS_RATIO = 0.3
MISSING_KEYWORDS_PREVIEW = 8
SUGGESTED_KEYWORDS = 5

_QUANTIFIED_RE = re.compile(r"\d|%")
_REPEATED_LETTERS_RE = re.compile(r"([a-z])\1{3,}")
_VOWELS_RE = re.compile(r"[aeiouy]")


class ATSAnalysisResult(BaseModel):
    """Scores and guidance for one resume snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_score: int = Field(ge=0, le=100)
    format_score: int = Field(ge=0, le=100)
    content_score: int = Field(ge=0, le=100)
    keyword_score: int = Field(ge=0, le=100)
    structure_score: int = Field(ge=0, le=100)
    is_weak: bool
    suggestions: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    critical_issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    matched_keywords: List[str] = Field(default_factory=list)
    missing_keywords: List[str] = Field(default_factory=list)
    detailed_analysis: str = ""
    source: str = "local"

    def sub_scores(self) -> Dict[str, int]:
        return {
            "format": self.format_score,
            "content": self.content_score,
            "keyword": self.keyword_score,
            "structure": self.structure_score,
        }


@dataclass
class _Feedback:
    suggestions: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    critical_issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def extend(self, other: "_Feedback") -> None:
        self.suggestions.extend(other.suggestions)
        self.strengths.extend(other.strengths)
        self.critical_issues.extend(other.critical_issues)
        self.warnings.extend(other.warnings)


@dataclass
class _InputQuality:
    too_short: bool
    gibberish: bool


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_resume(data: ResumeData) -> ATSAnalysisResult:
    """Score *data* for general ATS compatibility."""
    return _score(data, job_description=None)


def score_job_match(data: ResumeData, job_description: str) -> ATSAnalysisResult:
    """Score *data* against a target *job_description*.

    Raises :class:`InputValidationError` when the job description is empty.
    """
    if not job_description or not job_description.strip():
        raise InputValidationError("A job description is required for job-match analysis")
    return _score(data, job_description=job_description)


def clamp_score(value: float) -> int:
    """Round *value* and clamp it into [0, 100]."""
    return max(0, min(100, int(round(value))))


def overall_from(sub_scores: List[int]) -> int:
    """Unweighted mean of the sub-scores, rounded and clamped."""
    if not sub_scores:
        return 0
    return clamp_score(sum(sub_scores) / len(sub_scores))


def detect_industry(data: ResumeData) -> Optional[str]:
    """Infer the candidate's industry from titles and skill names."""
    role_text = " ".join(
        [data.personal_info.job_title]
        + [job.job_title for job in data.work_experience]
        + [skill.name for skill in data.skills]
    ).lower()
    best: Optional[str] = None
    best_hits = 0
    for industry, triggers in INDUSTRY_TRIGGERS.items():
        hits = sum(len(_term_pattern(t).findall(role_text)) for t in triggers)
        if hits > best_hits:
            best, best_hits = industry, hits
    return best


def keyword_vocabulary(industry: Optional[str]) -> List[str]:
    vocabulary = list(PROFESSIONAL_KEYWORDS)
    for term in INDUSTRY_KEYWORDS.get(industry or "", []):
        if term not in vocabulary:
            vocabulary.append(term)
    return vocabulary


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_ats_report(result: ATSAnalysisResult) -> str:
    """Render an :class:`ATSAnalysisResult` as a human-readable report."""
    grade = _score_to_grade(result.overall_score)
    lines = [
        f"## ATS Score: {result.overall_score}/100 {grade}",
        _score_bar(result.overall_score),
        "",
        "| Category  | Score |",
        "|-----------|-------|",
        f"| Format    | {result.format_score:3d}   |",
        f"| Content   | {result.content_score:3d}   |",
        f"| Keywords  | {result.keyword_score:3d}   |",
        f"| Structure | {result.structure_score:3d}   |",
    ]

    for title, items in (
        ("Critical Issues", result.critical_issues),
        ("Warnings", result.warnings),
        ("Strengths", result.strengths),
        ("Suggestions", result.suggestions),
    ):
        if items:
            lines.append("")
            lines.append(f"### {title}")
            for i, item in enumerate(items, 1):
                lines.append(f"{i}. {item}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private scoring helpers
# ---------------------------------------------------------------------------


def _score(data: ResumeData, job_description: Optional[str]) -> ATSAnalysisResult:
    text = body_text(data)
    quality = _assess_input(text)
    industry = detect_industry(data)
    vocabulary = keyword_vocabulary(industry)

    feedback = _Feedback()

    fmt_score, fmt_fb = _check_format(data)
    content_score, content_fb = _check_content(data, quality)
    kw_score, kw_fb, found, not_found = _check_keywords(data, text, vocabulary, quality)
    struct_score, struct_fb = _check_structure(data)

    for fb in (fmt_fb, content_fb, kw_fb, struct_fb):
        feedback.extend(fb)

    matched, missing = found, not_found
    if job_description is not None:
        struct_score, jd_fb, matched, missing = _apply_job_match(data, job_description, struct_score)
        feedback.extend(jd_fb)

    overall = overall_from([fmt_score, content_score, kw_score, struct_score])
    is_weak = overall < WEAK_THRESHOLD

    feedback.extend(_threshold_feedback(fmt_score, content_score, kw_score, struct_score, overall, missing))
    if quality.gibberish:
        feedback.critical_issues.append("Resume text contains repeated characters or unreadable words")
    if quality.too_short:
        feedback.critical_issues.append("Resume content is too short to evaluate reliably")

    return ATSAnalysisResult(
        overall_score=overall,
        format_score=fmt_score,
        content_score=content_score,
        keyword_score=kw_score,
        structure_score=struct_score,
        is_weak=is_weak,
        suggestions=_unique(feedback.suggestions),
        strengths=_unique(feedback.strengths),
        critical_issues=_unique(feedback.critical_issues),
        warnings=_unique(feedback.warnings),
        matched_keywords=matched,
        missing_keywords=missing[:MISSING_KEYWORDS_PREVIEW],
        detailed_analysis=_describe(overall, industry, job_description is not None),
        source="local",
    )


def _assess_input(text: str) -> _InputQuality:
    lowered = text.lower()
    unique_words = set(re.findall(r"[a-z0-9][a-z0-9\+\#\-]*", lowered))
    too_short = len(unique_words) < MIN_UNIQUE_WORDS

    long_tokens = {t for t in re.findall(r"[a-z]+", lowered) if len(t) >= 5}
    vowelless = [t for t in long_tokens if not _VOWELS_RE.search(t)]
    ratio = len(vowelless) / len(long_tokens) if long_tokens else 0.0
    gibberish = bool(_REPEATED_LETTERS_RE.search(lowered)) or ratio > VOWELLESS_RATIO

    return _InputQuality(too_short=too_short, gibberish=gibberish)


def _check_format(data: ResumeData) -> Tuple[int, _Feedback]:
    fb = _Feedback()
    info = data.personal_info
    score = 85
    for value in (info.name, info.email, info.phone):
        if value.strip():
            score += 5
    if not info.email.strip():
        fb.warnings.append("Missing email address - critical for ATS systems")
    return clamp_score(score), fb


def _check_content(data: ResumeData, quality: _InputQuality) -> Tuple[int, _Feedback]:
    fb = _Feedback()
    info = data.personal_info
    score = 0

    if info.name.strip() and info.email.strip() and info.phone.strip():
        score += 20
        fb.strengths.append("Complete contact information")
    else:
        fb.suggestions.append("Complete all contact information fields (name, email, phone)")

    if len(data.summary.strip()) >= SUMMARY_MIN_CHARS:
        score += 20
        fb.strengths.append("Professional summary included")
    else:
        fb.suggestions.append("Add a professional summary of at least 50 characters")

    if data.work_experience:
        if any(len(non_blank(job.responsibilities)) >= 2 for job in data.work_experience):
            score += 20
            fb.strengths.append("Detailed work experience")
        else:
            fb.suggestions.append("Add more detailed job responsibilities (at least 2 per role)")
    else:
        fb.suggestions.append("Add work experience")
        fb.warnings.append("No work experience found - this may significantly impact ATS scoring")

    if _has_quantified_achievements(data):
        score += 20
        fb.strengths.append("Includes quantifiable achievements")
    else:
        fb.suggestions.append("Add quantifiable achievements with numbers (e.g. 'Increased sales by 25%')")

    if data.education:
        score += 20
        fb.strengths.append("Education information included")
    else:
        fb.suggestions.append("Add education information")

    passive = " ".join([data.summary] + [r for job in data.work_experience for r in job.responsibilities])
    if "responsible for" in passive.lower():
        fb.warnings.append("Avoid passive phrases such as 'responsible for' -- use action verbs")

    if quality.gibberish:
        score -= GIBBERISH_CONTENT_PENALTY

    return clamp_score(score), fb


def _check_keywords(
    data: ResumeData,
    text: str,
    vocabulary: List[str],
    quality: _InputQuality,
) -> Tuple[int, _Feedback, List[str], List[str]]:
    fb = _Feedback()
    lowered = text.lower()
    counts = {term: len(_term_pattern(term).findall(lowered)) for term in vocabulary}
    found = [term for term in vocabulary if counts[term] > 0]
    not_found = [term for term in vocabulary if counts[term] == 0]

    score = min(100, len(found) * 100 / KEYWORD_TARGET)

    if len(data.skills) >= MIN_SKILLS:
        score += SKILLS_BONUS
        fb.strengths.append("Comprehensive skills section")
    else:
        fb.suggestions.append("Add more relevant skills (aim for 5+)")
    score = min(100, score)

    overused = [term for term in vocabulary if counts[term] > OVERUSE_LIMIT]
    if overused:
        score -= OVERUSE_PENALTY
        for term in overused:
            fb.warnings.append(f"Keyword '{term}' appears {counts[term]} times -- ATS systems may flag keyword stuffing")

    if quality.too_short:
        score /= 2
    if quality.gibberish:
        score = min(score, GIBBERISH_KEYWORD_CAP)

    return clamp_score(score), fb, found, not_found


def _check_structure(data: ResumeData) -> Tuple[int, _Feedback]:
    fb = _Feedback()
    info = data.personal_info
    present = {
        "contact": bool(info.name.strip() and (info.email.strip() or info.phone.strip())),
        "summary": bool(data.summary.strip()),
        "experience": bool(data.work_experience),
        "education": bool(data.education),
        "skills": bool(data.skills),
    }
    missing = [name for name, ok in present.items() if not ok]
    if not missing:
        fb.strengths.append("All standard resume sections present")
    return clamp_score(20 * sum(present.values())), fb


def _apply_job_match(
    data: ResumeData,
    job_description: str,
    struct_score: int,
) -> Tuple[int, _Feedback, List[str], List[str]]:
    fb = _Feedback()
    resume_text = build_resume_text(data)
    match = match_keywords(resume_text, job_description)

    if match.match_percent >= 70:
        fb.strengths.append(f"Strong alignment with the job description ({match.match_percent}% keyword match)")
    elif match.missing:
        top = ", ".join(match.missing[:SUGGESTED_KEYWORDS])
        fb.suggestions.append(f"Add keywords from the job description: {top}")

    for req in unmet_requirements(match.requirements, resume_text):
        fb.suggestions.append(f"Address required skill: {req}")
    for req in unmet_requirements(match.requirements, resume_text, kind="preferred_skills"):
        fb.suggestions.append(f"Consider adding preferred skill: {req}")

    blended = clamp_score((struct_score + match.match_percent) / 2)
    return blended, fb, match.matched, match.missing


def _threshold_feedback(
    fmt_score: int,
    content_score: int,
    kw_score: int,
    struct_score: int,
    overall: int,
    missing: List[str],
) -> _Feedback:
    fb = _Feedback()

    if fmt_score >= 95:
        fb.strengths.append("Professional document format")

    if kw_score < 60:
        fb.critical_issues.append("Low keyword density")
        fb.suggestions.append("Add more industry-relevant keywords")
        if missing:
            fb.suggestions.append(f"Consider adding: {', '.join(missing[:SUGGESTED_KEYWORDS])}")
    elif kw_score >= 80:
        fb.strengths.append("Strong keyword optimization")

    if content_score < 65:
        fb.suggestions.append("Expand on professional accomplishments with measurable results")

    if struct_score < 75:
        fb.suggestions.append("Ensure all standard resume sections are present")

    if overall < WEAK_THRESHOLD:
        fb.critical_issues.append("Resume may struggle with ATS systems")
    elif not fb.suggestions:
        fb.strengths.append("Excellent overall ATS compatibility")

    return fb


def _has_quantified_achievements(data: ResumeData) -> bool:
    sources = [data.summary]
    for job in data.work_experience:
        sources.extend(non_blank(job.responsibilities))
    sources.extend(p.description for p in data.projects)
    return any(_QUANTIFIED_RE.search(s) for s in sources if s)


def _term_pattern(term: str) -> re.Pattern:
    return re.compile(r"(?<![a-z])" + re.escape(term))


def _unique(items: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def _describe(overall: int, industry: Optional[str], job_mode: bool) -> str:
    mode = "job-match" if job_mode else "resume-only"
    return (
        f"{mode} analysis scored {overall}/100; "
        f"keyword vocabulary: {industry or 'general'}."
    )


def _score_to_grade(score: int) -> str:
    if score >= 90:
        return "🟢 Excellent"
    elif score >= 75:
        return "🟡 Good"
    elif score >= 60:
        return "🟠 Fair"
    else:
        return "🔴 Needs Work"


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'█' * filled}{'░' * (width - filled)}]"
