"""ATS (Applicant Tracking System) scoring tool for resumes."""

from __future__ import annotations

from ..domain.ats_scorer import format_ats_report, score_job_match, score_resume
from ..errors import StudioError
from .base import BaseTool, ToolResult


class ATSScorerTool(BaseTool):
    """Score a resume JSON file for ATS compatibility."""

    name = "ats_score"
    description = """Score a resume for ATS compatibility. Returns a structured score (0-100)
with breakdown by format, content, keywords, and structure.
Optionally accepts a job description for keyword matching."""
    parameters = {
        "path": {
            "type": "string",
            "description": "Path to the resume JSON file to score",
            "required": True,
        },
        "job_description": {
            "type": "string",
            "description": "Optional job description text for keyword matching",
        },
    }

    async def execute(self, path: str, job_description: str = "") -> ToolResult:
        try:
            data = self._load_resume(path)
            if job_description.strip():
                result = score_job_match(data, job_description)
            else:
                result = score_resume(data)
        except StudioError as e:
            return ToolResult(success=False, output="", error=e.message)

        return ToolResult(
            success=True,
            output=format_ats_report(result),
            data=result.model_dump(),
        )
