"""Tests for job description keyword matching."""

from resume_studio.domain.job_matcher import (
    extract_keywords,
    extract_requirements,
    match_keywords,
    unmet_requirements,
)

JD = """Backend Engineer

Requirements:
- Python and Django
- Kubernetes operations

Nice to have:
- GraphQL

5+ years of experience with distributed systems and machine learning."""


def test_extract_keywords_filters_stop_words():
    keywords = extract_keywords("The team will work with Python and machine learning")
    assert {"python", "machine", "learning", "machine learning"} <= keywords
    assert "the" not in keywords
    assert "team" not in keywords


def test_extract_keywords_handles_empty_text():
    assert extract_keywords("") == set()


def test_match_keywords_is_sorted_and_rated():
    match = match_keywords("Python developer with Django", JD)
    assert match.matched == sorted(match.matched)
    assert match.missing == sorted(match.missing)
    assert {"python", "django"} <= set(match.matched)
    assert 0 < match.match_percent < 100


def test_match_against_empty_description():
    match = match_keywords("Python", "")
    assert match.match_rate == 0.0
    assert match.matched == []


def test_extract_requirements_sections():
    reqs = extract_requirements(JD)
    assert reqs["required_skills"] == ["python and django", "kubernetes operations"]
    assert reqs["preferred_skills"] == ["graphql"]
    assert set(reqs) == {"required_skills", "preferred_skills"}


def test_unmet_requirements():
    reqs = extract_requirements(JD)
    assert unmet_requirements(reqs, "Python developer") == ["kubernetes operations"]
    assert unmet_requirements(reqs, "Python developer", kind="preferred_skills") == ["graphql"]
    assert unmet_requirements(reqs, "Python and GraphQL", kind="preferred_skills") == []
