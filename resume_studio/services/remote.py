"""HTTP clients for the hosted resume services."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..domain.ats_scorer import (
    MISSING_KEYWORDS_PREVIEW,
    WEAK_THRESHOLD,
    ATSAnalysisResult,
    clamp_score,
    overall_from,
)
from ..domain.keyword_enhancer import TextEnhancement
from ..domain.models import ResumeData, Skill
from ..errors import InputValidationError, RemoteServiceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_ENHANCE_CONTEXT = "professional resume"

_SCORE_FIELDS = ("formatScore", "contentScore", "keywordScore", "structureScore")
_LIST_FIELDS = (
    "suggestions",
    "strengths",
    "criticalIssues",
    "warnings",
    "matchedKeywords",
    "missingKeywords",
)


class _ServiceClient:
    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = headers or {}
        self._transport = transport

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.url, json=payload, headers=self.headers)
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPStatusError as e:
            raise RemoteServiceError(
                f"{self.url} returned HTTP {e.response.status_code}",
                details={"status": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise RemoteServiceError(f"Request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise RemoteServiceError(f"{self.url} returned invalid JSON") from e

        if not isinstance(body, dict):
            raise RemoteServiceError(f"{self.url} returned an unexpected payload")
        if body.get("error"):
            raise RemoteServiceError(f"{self.url} reported an error: {body['error']}")
        return body


class RemoteATSAnalyzer(_ServiceClient):
    """Client for the hosted ATS analysis function.

    Remote scores are clamped into [0, 100] and then adjusted by the same
    rule-based checks the service applies server-side.
    """

    async def analyze(
        self,
        data: ResumeData,
        job_description: str = "",
        analysis_type: str = "job_match",
    ) -> ATSAnalysisResult:
        payload = {
            "resumeData": data.model_dump(by_alias=True),
            "jobDescription": job_description,
            "analysisType": analysis_type,
        }
        body = await self._post(payload)
        result = parse_analysis(body.get("analysis", body))
        return apply_rule_based_checks(result, data)


class TailoringClient(_ServiceClient):
    """Client for the resume tailoring service."""

    async def tailor(self, data: ResumeData, job_description: str) -> ResumeData:
        """Return a copy of *data* tailored to *job_description*.

        The service must keep every entity id; a response that adds, drops
        or renames entries is rejected.
        """
        if not job_description or not job_description.strip():
            raise InputValidationError("A job description is required for tailoring")

        body = await self._post(
            {
                "resumeData": data.model_dump(by_alias=True),
                "jobDescription": job_description,
            }
        )
        if "tailoredContent" not in body:
            raise RemoteServiceError("Tailoring response is missing tailoredContent")
        try:
            tailored = ResumeData.model_validate(body["tailoredContent"])
        except ValidationError as e:
            raise RemoteServiceError(f"Tailored resume failed validation: {e.error_count()} error(s)") from e

        if tailored.entity_ids() != data.entity_ids():
            raise RemoteServiceError("Tailored resume does not preserve the original structure")

        logger.info("Tailored resume received (%d jobs)", len(tailored.work_experience))
        return tailored


class KeywordEnhancementClient(_ServiceClient):
    """Client for the hosted keyword enhancement function."""

    async def enhance(self, text: str, context: str = DEFAULT_ENHANCE_CONTEXT) -> TextEnhancement:
        body = await self._post({"text": text, "context": context})
        enhanced = body.get("enhancedText")
        if not isinstance(enhanced, str) or not enhanced.strip():
            raise RemoteServiceError("Enhancement response is missing enhancedText")
        keywords = body.get("keywords") or []
        if not isinstance(keywords, list):
            raise RemoteServiceError("Enhancement response has a malformed keywords list")
        return TextEnhancement(text=enhanced.strip(), keywords=[str(k) for k in keywords], source="remote")


class SkillRecommendationClient(_ServiceClient):
    """Client for the skill recommendation action of the polishing service."""

    async def recommend(self, experience: str) -> List[Skill]:
        """Return skills suggested for *experience*, each with a fresh id."""
        if not experience or not experience.strip():
            raise InputValidationError("Work experience is required for skill recommendations")

        body = await self._post({"content": experience, "action": "recommend-skills"})
        raw = body.get("recommendations")
        if not isinstance(raw, list):
            raise RemoteServiceError("Skill response is missing recommendations")

        skills: List[Skill] = []
        for item in raw:
            if not isinstance(item, dict):
                raise RemoteServiceError("Skill recommendation is not an object")
            try:
                skills.append(Skill.model_validate({k: item[k] for k in ("name", "level") if k in item}))
            except ValidationError as e:
                raise RemoteServiceError(f"Skill recommendation failed validation: {e.error_count()} error(s)") from e
        logger.info("Received %d skill recommendation(s)", len(skills))
        return skills


# ---------------------------------------------------------------------------
# Response handling
# ---------------------------------------------------------------------------


def parse_analysis(raw: Any) -> ATSAnalysisResult:
    """Build an :class:`ATSAnalysisResult` from a remote JSON payload."""
    if not isinstance(raw, dict):
        raise RemoteServiceError("Analysis response is not an object")

    scores: Dict[str, int] = {}
    for key in _SCORE_FIELDS:
        try:
            value = float(raw[key])
        except KeyError as e:
            raise RemoteServiceError(f"Analysis response is missing {key}") from e
        except (TypeError, ValueError) as e:
            raise RemoteServiceError(f"Analysis response has a non-numeric {key}") from e
        # json accepts Infinity, NaN and 1e999
        if not math.isfinite(value):
            raise RemoteServiceError(f"Analysis response has a non-finite {key}")
        scores[key] = clamp_score(value)

    lists = {key: [str(item) for item in raw.get(key) or []] for key in _LIST_FIELDS}
    overall = overall_from(list(scores.values()))

    return ATSAnalysisResult(
        overall_score=overall,
        format_score=scores["formatScore"],
        content_score=scores["contentScore"],
        keyword_score=scores["keywordScore"],
        structure_score=scores["structureScore"],
        is_weak=overall < WEAK_THRESHOLD,
        suggestions=lists["suggestions"],
        strengths=lists["strengths"],
        critical_issues=lists["criticalIssues"],
        warnings=lists["warnings"],
        matched_keywords=lists["matchedKeywords"],
        missing_keywords=lists["missingKeywords"][:MISSING_KEYWORDS_PREVIEW],
        detailed_analysis=str(raw.get("detailedAnalysis") or ""),
        source="remote",
    )


def apply_rule_based_checks(result: ATSAnalysisResult, data: ResumeData) -> ATSAnalysisResult:
    """Adjust a remote result with checks that need the structured resume."""
    structure = result.structure_score
    content = result.content_score
    warnings = list(result.warnings)
    suggestions = list(result.suggestions)

    if not data.personal_info.email.strip():
        warnings.append("Missing email address - critical for ATS systems")
        structure -= 10
    if len(data.summary.strip()) < 50:
        suggestions.append("Add a professional summary (150-300 words recommended)")
    if not data.work_experience:
        warnings.append("No work experience found - this may significantly impact ATS scoring")
        content -= 20

    structure = clamp_score(structure)
    content = clamp_score(content)
    overall = overall_from([result.format_score, content, result.keyword_score, structure])

    return result.model_copy(
        update={
            "structure_score": structure,
            "content_score": content,
            "overall_score": overall,
            "is_weak": overall < WEAK_THRESHOLD,
            "warnings": list(dict.fromkeys(warnings)),
            "suggestions": list(dict.fromkeys(suggestions)),
        }
    )
