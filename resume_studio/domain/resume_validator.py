"""Pure domain logic for resume data validation.

All functions operate on :class:`ResumeData` -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

from .models import ResumeData, non_blank

_EMAIL_RE = re.compile(r"^[\w\.\-+]+@[\w\.\-]+\.\w+$")


@dataclass
class ValidationResult:
    """Structured result from resume validation."""

    valid: bool
    errors: List[Dict[str, str]] = field(default_factory=list)
    warnings: List[Dict[str, str]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_resume(data: ResumeData) -> ValidationResult:
    """Validate *data* before export.

    Missing fields are warnings (exports still work with fallbacks);
    malformed values are errors.
    """
    issues: List[Dict[str, str]] = []
    issues.extend(_check_contact(data))
    issues.extend(_check_entries(data))
    issues.extend(_check_placeholders(data))

    errors = [i for i in issues if i["level"] == "error"]
    warnings = [i for i in issues if i["level"] == "warning"]

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_validation_report(result: ValidationResult) -> str:
    """Render a :class:`ValidationResult` as a human-readable report."""
    status = "PASS" if result.valid else "FAIL"
    lines = [f"## Validation: {status}", ""]

    if result.errors:
        lines.append("### Errors")
        for e in result.errors:
            lines.append(f"- [{e['check']}] {e['message']}")
        lines.append("")

    if result.warnings:
        lines.append("### Warnings")
        for w in result.warnings:
            lines.append(f"- [{w['check']}] {w['message']}")
        lines.append("")

    if not result.errors and not result.warnings:
        lines.append("No issues found. Resume looks good!")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private checks
# ---------------------------------------------------------------------------


def _check_contact(data: ResumeData) -> List[Dict[str, str]]:
    issues: List[Dict[str, str]] = []
    info = data.personal_info

    if not info.name.strip():
        issues.append(
            {
                "level": "warning",
                "check": "name",
                "message": "Missing name -- exported files will be named 'resume'.",
            }
        )

    email = info.email.strip()
    if not email:
        issues.append({"level": "warning", "check": "email", "message": "Missing email address."})
    elif not _EMAIL_RE.match(email):
        issues.append({"level": "error", "check": "email", "message": f"Invalid email address: {email}"})

    if not info.phone.strip():
        issues.append({"level": "warning", "check": "phone", "message": "Missing phone number."})

    return issues


def _check_entries(data: ResumeData) -> List[Dict[str, str]]:
    issues: List[Dict[str, str]] = []

    for job in data.work_experience:
        if not job.job_title.strip() and not job.company.strip():
            issues.append(
                {
                    "level": "warning",
                    "check": "experience",
                    "message": f"Work experience entry {job.id} has neither a title nor a company.",
                }
            )
        elif not non_blank(job.responsibilities):
            issues.append(
                {
                    "level": "warning",
                    "check": "responsibilities",
                    "message": f"'{job.job_title or job.company}' has no responsibilities listed.",
                }
            )

    for edu in data.education:
        if not edu.degree.strip() and not edu.institution.strip():
            issues.append(
                {
                    "level": "warning",
                    "check": "education",
                    "message": f"Education entry {edu.id} has neither a degree nor an institution.",
                }
            )

    return issues


def _check_placeholders(data: ResumeData) -> List[Dict[str, str]]:
    text = " ".join([data.summary] + [r for job in data.work_experience for r in job.responsibilities])
    placeholders = re.findall(
        r"\b(?:TODO|FIXME|XXX|PLACEHOLDER|YOUR NAME|COMPANY NAME)\b",
        text,
        re.IGNORECASE,
    )
    if not placeholders:
        return []
    return [
        {
            "level": "warning",
            "check": "placeholders",
            "message": f"Contains placeholder text: {', '.join(sorted(set(placeholders)))}",
        }
    ]
