"""Pure domain logic for rewriting resume text with stronger keywords.

This is the offline counterpart of the hosted enhancement service: a fixed
set of phrase rewrites applied sentence by sentence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

ENHANCEMENT_KEYWORDS: List[str] = [
    "strategic",
    "innovative",
    "efficient",
    "collaborative",
    "results-driven",
    "analytical",
    "detail-oriented",
    "problem-solving",
    "leadership",
    "communication",
    "project management",
    "cross-functional",
    "data-driven",
    "optimization",
    "stakeholder management",
    "performance improvement",
    "best practices",
]
SUGGESTED_KEYWORD_COUNT = 8

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_MANAGE = re.compile(r"\b(manag(?:e|es|ed|ing))\b", re.IGNORECASE)
_DEVELOP = re.compile(r"\b(develop(?:s|ed|ing)?)\b", re.IGNORECASE)
_WORK_WITH = re.compile(r"\bwork(s|ed|ing)? with\b", re.IGNORECASE)
_COLLABORATE = {"": "collaborate", "s": "collaborates", "ed": "collaborated", "ing": "collaborating"}


@dataclass
class TextEnhancement:
    """Rewritten text and the keywords it now emphasizes."""

    text: str
    keywords: List[str] = field(default_factory=list)
    source: str = "local"


def enhance_text(text: str) -> TextEnhancement:
    """Rewrite *text* with stronger action phrasing.

    Each sentence is rewritten on its own; a sentence that already carries
    the keyword is left as it is.  The result always ends with a period.
    """
    sentences = [s.strip() for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]
    if not sentences:
        return TextEnhancement(text="")

    injected: List[str] = []
    rewritten = [_enhance_sentence(sentence, injected) for sentence in sentences]

    keywords = list(dict.fromkeys(injected + ENHANCEMENT_KEYWORDS))[:SUGGESTED_KEYWORD_COUNT]
    return TextEnhancement(text=". ".join(rewritten) + ".", keywords=keywords)


def _enhance_sentence(sentence: str, injected: List[str]) -> str:
    lowered = sentence.lower()
    enhanced = sentence

    if "strategic" not in lowered and _MANAGE.search(enhanced):
        enhanced = _MANAGE.sub(lambda m: f"strategically {m.group(1).lower()}", enhanced)
        injected.append("strategic")
    if "innovative" not in lowered and _DEVELOP.search(enhanced):
        enhanced = _DEVELOP.sub(lambda m: f"innovatively {m.group(1).lower()}", enhanced)
        injected.append("innovative")
    if "collaborat" not in lowered and _WORK_WITH.search(enhanced):
        enhanced = _WORK_WITH.sub(lambda m: f"{_COLLABORATE[(m.group(1) or '').lower()]} with", enhanced)
        injected.append("collaborative")

    return enhanced[:1].upper() + enhanced[1:]
