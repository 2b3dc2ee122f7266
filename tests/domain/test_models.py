"""Tests for the resume data model and text helpers."""

import pytest

from resume_studio.domain.models import ResumeData, Skill
from resume_studio.domain.resume_text import (
    body_text,
    build_resume_text,
    content_lines,
    experience_text,
    split_bullets,
)


def test_camel_case_payload_round_trips(strong_resume):
    payload = strong_resume.model_dump(by_alias=True)
    assert payload["personalInfo"]["jobTitle"] == "Senior Software Engineer"
    assert ResumeData.model_validate(payload) == strong_resume


def test_technologies_accept_comma_string(strong_resume):
    assert strong_resume.projects[0].technologies == ["React", "FastAPI"]


def test_entities_get_distinct_ids(strong_resume):
    ids = [s.id for s in strong_resume.skills]
    assert len(ids) == len(set(ids))


def test_replace_item_updates_by_id(strong_resume):
    skill = strong_resume.skills[0].model_copy(update={"level": 10})
    updated = strong_resume.replace_item("skills", skill)
    assert updated.skills[0].level == 10
    assert strong_resume.skills[0].level == 90


def test_replace_item_appends_new_entry(strong_resume):
    updated = strong_resume.replace_item("skills", Skill(name="Go"))
    assert updated.skills[-1].name == "Go"
    assert len(updated.skills) == len(strong_resume.skills) + 1


def test_remove_item(strong_resume):
    target = strong_resume.skills[1].id
    updated = strong_resume.remove_item("skills", target)
    assert target not in updated.entity_ids()["skills"]


def test_unknown_section_raises(strong_resume):
    with pytest.raises(ValueError):
        strong_resume.remove_item("hobbies", "x")


def test_split_bullets_strips_glyphs():
    assert split_bullets("• one\n- two • three\n\n") == ["one", "two", "three"]


def test_content_lines_paragraph_style():
    assert content_lines(["first line", "", "second"], "paragraph") == ["first line second"]
    assert content_lines("", "paragraph") == []


def test_build_resume_text_labels(strong_resume):
    text = build_resume_text(strong_resume)
    assert text.startswith("Name: Jane Smith")
    assert "Senior Software Engineer at Acme Corp (Jan 2020 - Present)" in text
    assert "• Python (Level: 90)" in text


def test_body_text_excludes_labels(strong_resume):
    text = body_text(strong_resume)
    assert "Name:" not in text
    assert "jane.smith@example.com" not in text


def test_split_bullets_keeps_leading_sign():
    assert split_bullets("-20% churn after onboarding rework\n* -5 days to close\n-") == [
        "-20% churn after onboarding rework",
        "-5 days to close",
    ]


def test_add_skills_skips_names_already_listed(strong_resume):
    updated = strong_resume.add_skills(
        [Skill(name="python", level=95), Skill(name="Kubernetes", level=70), Skill(name="kubernetes")]
    )
    assert [s.name for s in updated.skills[len(strong_resume.skills) :]] == ["Kubernetes"]
    assert updated.skills[-1].level == 70
    assert len(strong_resume.skills) == 6


def test_experience_text(strong_resume):
    lines = experience_text(strong_resume).splitlines()
    assert lines[0] == "Senior Software Engineer at Acme Corp"
    assert len(lines) == 5
    assert experience_text(ResumeData()) == ""
