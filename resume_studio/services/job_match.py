"""Job-match analysis with a remote-first, local-fallback chain."""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.ats_scorer import ATSAnalysisResult, score_job_match
from ..domain.models import ResumeData
from ..errors import InputValidationError, RemoteServiceError
from ..observability import StudioObserver
from .remote import RemoteATSAnalyzer

logger = logging.getLogger(__name__)


class JobMatchService:
    """Score a resume against a job description.

    The remote analyzer is tried first when configured.  Any
    :class:`RemoteServiceError` is logged and the local heuristic scorer
    answers instead, so callers always get a result for valid input.
    """

    def __init__(
        self,
        analyzer: Optional[RemoteATSAnalyzer] = None,
        observer: Optional[StudioObserver] = None,
    ):
        self.analyzer = analyzer
        self.observer = observer

    async def analyze(self, data: ResumeData, job_description: str) -> ATSAnalysisResult:
        if not job_description or not job_description.strip():
            raise InputValidationError("A job description is required for job-match analysis")

        if self.analyzer is not None:
            try:
                result = await self.analyzer.analyze(data, job_description, analysis_type="job_match")
                self._record(result, fallback=False)
                return result
            except RemoteServiceError as e:
                logger.warning("Remote job-match analysis failed, using local scoring: %s", e)

        result = score_job_match(data, job_description)
        self._record(result, fallback=self.analyzer is not None)
        return result

    def _record(self, result: ATSAnalysisResult, fallback: bool) -> None:
        if self.observer is not None:
            self.observer.log_analysis(
                mode="job_match",
                overall_score=result.overall_score,
                source=result.source,
                fallback=fallback,
            )
