"""Resume Studio Services - clients for the hosted resume services."""

from .job_match import JobMatchService
from .keyword_enhancer import KeywordEnhancer
from .remote import (
    KeywordEnhancementClient,
    RemoteATSAnalyzer,
    SkillRecommendationClient,
    TailoringClient,
    apply_rule_based_checks,
    parse_analysis,
)

__all__ = [
    "JobMatchService",
    "KeywordEnhancer",
    "KeywordEnhancementClient",
    "RemoteATSAnalyzer",
    "SkillRecommendationClient",
    "TailoringClient",
    "apply_rule_based_checks",
    "parse_analysis",
]
