"""Tests for optimization planning and application."""

from resume_studio.domain.ats_scorer import score_resume
from resume_studio.domain.models import ResumeData
from resume_studio.domain.optimizer import (
    ADDED_SKILL_LEVEL,
    SUMMARY_TEMPLATE,
    apply_optimizations,
    plan_optimizations,
    select,
)


def _plan(data: ResumeData):
    return plan_optimizations(score_resume(data), data)


def test_empty_resume_plan_is_sorted_by_priority_then_impact():
    plan = _plan(ResumeData())
    assert [o.id for o in plan] == ["keywords", "content", "summary", "structure", "format"]
    assert [o.priority for o in plan] == ["critical", "critical", "important", "important", "minor"]


def test_format_fix_is_never_preselected():
    plan = _plan(ResumeData())
    fmt = next(o for o in plan if o.id == "format")
    assert fmt.selected is False
    assert all(o.selected for o in plan if o.id != "format")


def test_strong_resume_only_gets_minor_fix(strong_resume):
    assert [o.id for o in _plan(strong_resume)] == ["format"]


def test_apply_adds_missing_skills_without_duplicates(strong_resume):
    plan = select(_plan(ResumeData()), ["keywords"])
    updated = apply_optimizations(strong_resume, plan)

    names = [s.name for s in updated.skills]
    assert names.count("Leadership") == 1
    added = names[len(strong_resume.skills):]
    assert added == ["Project Management", "Data Analysis", "Strategic Planning"]
    assert all(s.level == ADDED_SKILL_LEVEL for s in updated.skills[len(strong_resume.skills):])


def test_apply_rewrites_passive_openers(make_resume):
    data = make_resume(
        workExperience=[
            {"jobTitle": "Engineer", "responsibilities": ["Responsible for deployments", "Shipped features"]}
        ]
    )
    plan = select(_plan(ResumeData()), ["content"])
    updated = apply_optimizations(data, plan)
    assert updated.work_experience[0].responsibilities == ["Led and managed deployments", "Shipped features"]


def test_apply_fills_short_summary_with_job_title(make_resume):
    data = make_resume(summary="Engineer.")
    updated = apply_optimizations(data, select(_plan(data), ["summary"]))
    assert updated.summary == SUMMARY_TEMPLATE.format(job_title="Senior Software Engineer")


def test_summary_falls_back_to_professional():
    updated = apply_optimizations(ResumeData(), select(_plan(ResumeData()), ["structure"]))
    assert updated.summary.startswith("Experienced professional with")


def test_apply_does_not_mutate_input(make_resume):
    data = make_resume(summary="")
    before = data.model_dump()
    apply_optimizations(data, _plan(data))
    assert data.model_dump() == before


def test_unselected_optimizations_are_skipped(strong_resume):
    plan = select(_plan(ResumeData()), [])
    assert apply_optimizations(strong_resume, plan) == strong_resume


def test_optimization_to_dict():
    opt = _plan(ResumeData())[0]
    payload = opt.to_dict()
    assert payload["id"] == "keywords"
    assert payload["impact"] == 25
    assert payload["preview"].startswith("Adds skills such as: ")
