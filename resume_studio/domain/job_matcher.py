"""Pure domain logic for job description keyword matching.

All functions operate on content strings -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Set

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

STOP_WORDS: Set[str] = {
    "the",
    "and",
    "for",
    "are",
    "but",
    "not",
    "you",
    "all",
    "can",
    "had",
    "her",
    "was",
    "one",
    "our",
    "out",
    "has",
    "have",
    "been",
    "will",
    "with",
    "this",
    "that",
    "from",
    "they",
    "were",
    "which",
    "their",
    "about",
    "would",
    "there",
    "what",
    "also",
    "into",
    "more",
    "other",
    "than",
    "then",
    "them",
    "these",
    "some",
    "such",
    "only",
    "over",
    "very",
    "just",
    "being",
    "through",
    "during",
    "before",
    "after",
    "between",
    "under",
    "again",
    "once",
    "here",
    "when",
    "where",
    "both",
    "each",
    "most",
    "same",
    "should",
    "could",
    "does",
    "doing",
    "while",
    "must",
    "work",
    "working",
    "looking",
    "seeking",
    "ability",
    "able",
    "including",
    "using",
    "strong",
    "excellent",
    "good",
    "great",
    "well",
    "team",
    "role",
    "position",
    "company",
    "join",
    "ideal",
    "candidate",
    "required",
    "preferred",
    "minimum",
    "years",
    "year",
    "experience",
    "plus",
    "who",
    "your",
    "how",
}

_MULTI_WORD_TERMS = re.compile(
    r"\b(?:machine learning|deep learning|data science|data analysis|project management|"
    r"full stack|front end|back end|cloud computing|"
    r"continuous integration|continuous delivery|"
    r"natural language processing|computer vision|customer service)\b"
)


@dataclass
class KeywordMatch:
    """Overlap between resume keywords and job-description keywords."""

    matched: List[str]
    missing: List[str]
    match_rate: float
    requirements: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def match_percent(self) -> int:
        return round(self.match_rate * 100)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_keywords(text: str) -> Set[str]:
    """Extract meaningful keywords from *text*, filtering stop words."""
    lowered = (text or "").lower()
    words = {w.rstrip(".") for w in re.findall(r"\b[a-z][a-z\+\#\.]{2,}", lowered)}
    words |= set(_MULTI_WORD_TERMS.findall(lowered))
    return {w for w in words if len(w) >= 3} - STOP_WORDS


def match_keywords(resume_text: str, job_description: str) -> KeywordMatch:
    """Compare keywords of *resume_text* with those of *job_description*.

    Matched and missing lists are sorted so the result is reproducible.
    """
    resume_kw = extract_keywords(resume_text)
    jd_kw = extract_keywords(job_description)

    matched = sorted(resume_kw & jd_kw)
    missing = sorted(jd_kw - resume_kw)
    rate = len(matched) / len(jd_kw) if jd_kw else 0.0

    return KeywordMatch(
        matched=matched,
        missing=missing,
        match_rate=rate,
        requirements=extract_requirements(job_description),
    )


def extract_requirements(jd: str) -> Dict[str, List[str]]:
    """Extract structured requirements from a job description string."""
    reqs: Dict[str, List[str]] = {
        "required_skills": [],
        "preferred_skills": [],
    }
    jd_lower = (jd or "").lower()

    req_section = re.search(
        r"(?:required|must have|requirements?|qualifications?)[:\s]*\n((?:[-•*]\s*.+\n?)+)",
        jd_lower,
    )
    if req_section:
        items = re.findall(r"[-•*]\s*(.+)", req_section.group(1))
        reqs["required_skills"] = [i.strip() for i in items]

    pref_section = re.search(
        r"(?:preferred|nice to have|bonus|desired)[:\s]*\n((?:[-•*]\s*.+\n?)+)",
        jd_lower,
    )
    if pref_section:
        items = re.findall(r"[-•*]\s*(.+)", pref_section.group(1))
        reqs["preferred_skills"] = [i.strip() for i in items]

    return reqs


def unmet_requirements(
    requirements: Dict[str, List[str]],
    resume_text: str,
    kind: str = "required_skills",
) -> List[str]:
    """Skills of *kind* none of whose significant words appear in the resume."""
    resume_lower = resume_text.lower()
    unmet: List[str] = []
    for req in requirements.get(kind, []):
        req_words = [w for w in req.split() if len(w) > 3]
        if req_words and not any(w in resume_lower for w in req_words):
            unmet.append(req)
    return unmet
