"""Resume Studio Domain - Pure domain logic for resume operations.

This package contains pure functions with no file system or network
dependencies.  All I/O is handled by the export, services, tools and web
layers; this package operates on :class:`ResumeData` and strings.
"""

from .ats_scorer import (
    WEAK_THRESHOLD,
    ATSAnalysisResult,
    format_ats_report,
    score_job_match,
    score_resume,
)
from .job_matcher import KeywordMatch, extract_keywords, extract_requirements, match_keywords
from .keyword_enhancer import TextEnhancement, enhance_text
from .models import (
    Certification,
    Education,
    PersonalInfo,
    Project,
    ResumeData,
    Skill,
    WorkExperience,
    new_id,
    non_blank,
)
from .optimizer import Optimization, apply_optimizations, plan_optimizations
from .plans import PLANS, ExportAllowance, Plan, Subscription, can_use_fix, consume_export, resolve_plan
from .resume_text import build_resume_text, content_lines, experience_text, split_bullets
from .resume_validator import ValidationResult, format_validation_report, validate_resume

__all__ = [
    # Models
    "ResumeData",
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "Project",
    "Certification",
    "Skill",
    "new_id",
    "non_blank",
    # Text helpers
    "build_resume_text",
    "content_lines",
    "experience_text",
    "split_bullets",
    # ATS Scorer
    "score_resume",
    "score_job_match",
    "format_ats_report",
    "ATSAnalysisResult",
    "WEAK_THRESHOLD",
    # Job Matcher
    "match_keywords",
    "extract_keywords",
    "extract_requirements",
    "KeywordMatch",
    # Keyword Enhancer
    "enhance_text",
    "TextEnhancement",
    # Optimizer
    "plan_optimizations",
    "apply_optimizations",
    "Optimization",
    # Plans
    "PLANS",
    "Plan",
    "Subscription",
    "ExportAllowance",
    "resolve_plan",
    "consume_export",
    "can_use_fix",
    # Validator
    "validate_resume",
    "ValidationResult",
    "format_validation_report",
]
