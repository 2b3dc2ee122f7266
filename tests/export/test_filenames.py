"""Tests for export filenames."""

from datetime import date

from resume_studio.domain.models import ResumeData
from resume_studio.export.filenames import generate_filename, sanitize_name

DAY = date(2025, 1, 15)


def test_generate_filename_strips_punctuation(make_resume):
    data = make_resume(personalInfo={"name": "Jane O'Brien"})
    assert generate_filename(data, "docx", today=DAY) == "Jane_OBrien_Resume_2025-01-15.docx"


def test_missing_name_falls_back_to_resume():
    assert generate_filename(ResumeData(), ".pdf", today=DAY) == "resume_Resume_2025-01-15.pdf"


def test_sanitize_name_collapses_whitespace_and_truncates():
    assert sanitize_name("  Mary   Ann\tLee ") == "Mary_Ann_Lee"
    assert len(sanitize_name("A" * 50)) == 30


def test_sanitize_name_drops_non_ascii():
    assert sanitize_name("José Núñez") == "Jos_Nez"
    assert sanitize_name("李雷") == "resume"
