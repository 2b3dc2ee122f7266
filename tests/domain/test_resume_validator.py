"""Tests for pre-export resume validation."""

from resume_studio.domain.models import ResumeData
from resume_studio.domain.resume_validator import format_validation_report, validate_resume


def test_strong_resume_is_valid(strong_resume):
    result = validate_resume(strong_resume)
    assert result.valid
    assert result.errors == []
    assert result.warnings == []
    assert "No issues found" in format_validation_report(result)


def test_empty_resume_only_warns():
    result = validate_resume(ResumeData())
    assert result.valid
    assert {w["check"] for w in result.warnings} == {"name", "email", "phone"}


def test_malformed_email_is_an_error(make_resume):
    result = validate_resume(make_resume(personalInfo={"name": "Jane", "email": "jane-at-example"}))
    assert not result.valid
    assert result.errors[0]["check"] == "email"
    assert "## Validation: FAIL" in format_validation_report(result)


def test_entries_without_content_warn(make_resume):
    data = make_resume(
        workExperience=[{"jobTitle": "Engineer", "responsibilities": ["", "  "]}],
        education=[{"graduationYear": "2020"}],
    )
    checks = {w["check"] for w in validate_resume(data).warnings}
    assert {"responsibilities", "education"} <= checks


def test_placeholder_text_warns(make_resume):
    result = validate_resume(make_resume(summary="TODO write a summary"))
    assert any(w["check"] == "placeholders" for w in result.warnings)
