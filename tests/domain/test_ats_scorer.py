"""Tests for the ATS scoring engine."""

import pytest

from resume_studio.domain.ats_scorer import (
    WEAK_THRESHOLD,
    ATSAnalysisResult,
    detect_industry,
    format_ats_report,
    score_job_match,
    score_resume,
)
from resume_studio.domain.models import ResumeData
from resume_studio.errors import InputValidationError

PLAIN_BULLETS = [
    "Led engineers delivering a microservices architecture and improving deployment speed",
    "Drove strategic project management and stakeholder communication across product lines",
]


def _scores(result: ATSAnalysisResult):
    return [
        result.overall_score,
        result.format_score,
        result.content_score,
        result.keyword_score,
        result.structure_score,
    ]


class TestScoreResume:
    def test_strong_resume_scores_high(self, strong_resume):
        result = score_resume(strong_resume)
        assert result.overall_score >= 90
        assert result.format_score == 100
        assert result.content_score == 100
        assert result.structure_score == 100
        assert not result.is_weak
        assert result.source == "local"
        assert "Complete contact information" in result.strengths

    def test_empty_resume_does_not_raise(self):
        result = score_resume(ResumeData())
        assert all(0 <= s <= 100 for s in _scores(result))
        assert result.is_weak
        assert result.content_score == 0
        assert result.structure_score == 0
        assert "Resume may struggle with ATS systems" in result.critical_issues

    def test_overall_is_mean_of_sub_scores(self, strong_resume):
        result = score_resume(strong_resume.model_copy(update={"summary": ""}))
        expected = round(
            (result.format_score + result.content_score + result.keyword_score + result.structure_score) / 4
        )
        assert result.overall_score == expected

    def test_is_weak_matches_threshold(self, strong_resume):
        for data in (strong_resume, ResumeData()):
            result = score_resume(data)
            assert result.is_weak == (result.overall_score < WEAK_THRESHOLD)

    def test_scoring_is_deterministic(self, strong_resume):
        assert score_resume(strong_resume) == score_resume(strong_resume)

    def test_quantified_achievement_raises_content_score(self, make_resume):
        job = {
            "jobTitle": "Software Engineer",
            "company": "Acme Corp",
            "responsibilities": list(PLAIN_BULLETS),
        }
        plain = make_resume(
            summary="Software engineer leading cross-functional teams and agile delivery for cloud platforms.",
            workExperience=[job],
            projects=[],
        )
        quantified = make_resume(
            summary=plain.summary,
            workExperience=[{**job, "responsibilities": PLAIN_BULLETS + ["Cut hosting costs by 25%"]}],
            projects=[],
        )
        assert score_resume(quantified).content_score > score_resume(plain).content_score

    def test_keyword_stuffing_never_scores_higher(self, make_resume, strong_resume):
        stuffed_job = strong_resume.work_experience[0].model_dump(by_alias=True)
        stuffed_job["responsibilities"] = stuffed_job["responsibilities"] + [
            " ".join(["leadership"] * 12)
        ]
        normal_job = strong_resume.work_experience[0].model_dump(by_alias=True)
        normal_job["responsibilities"] = normal_job["responsibilities"] + ["Showed leadership"]

        stuffed = score_resume(make_resume(workExperience=[stuffed_job]))
        normal = score_resume(make_resume(workExperience=[normal_job]))

        assert stuffed.keyword_score <= normal.keyword_score
        assert stuffed.overall_score <= normal.overall_score
        assert any("keyword stuffing" in w for w in stuffed.warnings)

    def test_gibberish_caps_keyword_score(self, make_resume):
        result = score_resume(
            make_resume(summary="aaaaaaaa bbbbbbbbb xkcdqwrtz plmnbvcxz zzzzzz leadership management agile")
        )
        assert result.keyword_score <= 20
        assert "Resume text contains repeated characters or unreadable words" in result.critical_issues

    def test_short_resume_halves_keyword_score(self):
        data = ResumeData.model_validate(
            {"summary": "Leadership, management, agile, strategic development and analysis."}
        )
        result = score_resume(data)
        # six vocabulary hits would be 60 before halving
        assert result.keyword_score == 30
        assert "Resume content is too short to evaluate reliably" in result.critical_issues

    def test_missing_keywords_are_capped(self):
        result = score_resume(ResumeData())
        assert len(result.missing_keywords) <= 8

    def test_suggestions_have_no_duplicates(self):
        result = score_resume(ResumeData())
        assert len(result.suggestions) == len(set(result.suggestions))

    def test_low_keywords_suggest_missing_terms(self):
        result = score_resume(ResumeData())
        assert "Add more industry-relevant keywords" in result.suggestions
        assert any(s.startswith("Consider adding: ") for s in result.suggestions)

    def test_missing_email_warns(self, strong_resume):
        info = strong_resume.personal_info.model_copy(update={"email": ""})
        result = score_resume(strong_resume.model_copy(update={"personal_info": info}))
        assert result.format_score == 95
        assert "Missing email address - critical for ATS systems" in result.warnings

    def test_passive_phrase_warns(self, make_resume):
        job = {"jobTitle": "Engineer", "responsibilities": ["Responsible for builds", "Responsible for tests"]}
        result = score_resume(make_resume(workExperience=[job]))
        assert any("responsible for" in w for w in result.warnings)


class TestScoreJobMatch:
    JD = """Senior Software Engineer

Requirements:
- Python and AWS experience
- Kubernetes operations

Nice to have:
- Terraform modules

We value microservices, testing and automation."""

    @pytest.mark.parametrize("jd", ["", "   ", "\n\t"])
    def test_empty_job_description_is_rejected(self, strong_resume, jd):
        with pytest.raises(InputValidationError):
            score_job_match(strong_resume, jd)

    def test_structure_blends_keyword_overlap(self, strong_resume):
        resume_only = score_resume(strong_resume)
        matched = score_job_match(strong_resume, self.JD)
        assert matched.structure_score <= resume_only.structure_score
        assert matched.matched_keywords == sorted(matched.matched_keywords)
        assert "python" in matched.matched_keywords

    def test_unmet_requirement_is_suggested(self, strong_resume):
        result = score_job_match(strong_resume, self.JD)
        assert "Address required skill: kubernetes operations" in result.suggestions
        assert "Consider adding preferred skill: terraform modules" in result.suggestions
        assert "kubernetes" in result.missing_keywords

    def test_job_match_is_deterministic(self, strong_resume):
        assert score_job_match(strong_resume, self.JD) == score_job_match(strong_resume, self.JD)


class TestDetectIndustry:
    def test_technology_from_titles_and_skills(self, strong_resume):
        assert detect_industry(strong_resume) == "technology"

    def test_no_signal_returns_none(self):
        assert detect_industry(ResumeData()) is None


class TestFormatReport:
    def test_report_contains_scores(self, strong_resume):
        result = score_resume(strong_resume)
        report = format_ats_report(result)
        assert f"## ATS Score: {result.overall_score}/100" in report
        assert "| Keywords  |" in report
        assert "### Strengths" in report

    def test_report_lists_critical_issues(self):
        report = format_ats_report(score_resume(ResumeData()))
        assert "Needs Work" in report
        assert "### Critical Issues" in report


def test_result_serializes_with_camel_case_aliases(strong_resume):
    payload = score_resume(strong_resume).model_dump(by_alias=True)
    assert {"overallScore", "keywordScore", "isWeak", "missingKeywords"} <= set(payload)
