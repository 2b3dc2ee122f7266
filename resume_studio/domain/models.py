"""Canonical resume data model.

Every entity is a pydantic model with snake_case attributes.  The wire
format uses camelCase (``jobTitle``, ``workExperience``...) so payloads
coming from the resume builder front end validate unchanged.
"""

from __future__ import annotations

import uuid
from typing import Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

WritingStyle = Literal["bullet", "paragraph"]

SECTIONS = (
    "work_experience",
    "education",
    "skills",
    "projects",
    "courses_and_certifications",
)


def new_id() -> str:
    """Return a collision-free entity id."""
    return uuid.uuid4().hex


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(_Model):
    name: str = ""
    job_title: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    github: str = ""


class WorkExperience(_Model):
    id: str = Field(default_factory=new_id)
    job_title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    responsibilities: List[str] = Field(default_factory=list)
    writing_style: WritingStyle = "bullet"


class Education(_Model):
    id: str = Field(default_factory=new_id)
    degree: str = ""
    institution: str = ""
    graduation_year: str = ""
    gpa: Optional[str] = None
    location: str = ""


class Project(_Model):
    id: str = Field(default_factory=new_id)
    name: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    start_date: str = ""
    end_date: str = ""
    writing_style: WritingStyle = "bullet"

    @field_validator("technologies", mode="before")
    @classmethod
    def _split_technologies(cls, value):
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value


class Certification(_Model):
    id: str = Field(default_factory=new_id)
    title: str = ""
    issuer: str = ""
    date: str = ""
    url: Optional[str] = None
    description: str = ""
    type: Literal["course", "certification"] = "certification"
    writing_style: WritingStyle = "bullet"


class Skill(_Model):
    id: str = Field(default_factory=new_id)
    name: str
    level: int = Field(default=0, ge=0, le=100)


class ResumeData(_Model):
    """Root aggregate edited by the resume builder."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    courses_and_certifications: List[Certification] = Field(default_factory=list)

    def replace_item(self, section: str, item: BaseModel) -> "ResumeData":
        """Return a copy with *item* replacing the entry sharing its id.

        The item is appended when no entry has that id.
        """
        items = list(self._section(section))
        for index, existing in enumerate(items):
            if existing.id == item.id:
                items[index] = item
                break
        else:
            items.append(item)
        return self.model_copy(update={section: items})

    def remove_item(self, section: str, item_id: str) -> "ResumeData":
        """Return a copy without the entry whose id is *item_id*."""
        items = [i for i in self._section(section) if i.id != item_id]
        return self.model_copy(update={section: items})

    def add_skills(self, skills: Iterable[Skill]) -> "ResumeData":
        """Return a copy with *skills* appended, skipping names already listed.

        Names compare case-insensitively, including among *skills* themselves.
        """
        seen = {s.name.strip().lower() for s in self.skills}
        merged = list(self.skills)
        for skill in skills:
            key = skill.name.strip().lower()
            if key and key not in seen:
                seen.add(key)
                merged.append(skill)
        return self.model_copy(update={"skills": merged})

    def entity_ids(self) -> dict[str, List[str]]:
        return {section: [i.id for i in self._section(section)] for section in SECTIONS}

    def _section(self, section: str) -> list:
        if section not in SECTIONS:
            raise ValueError(f"Unknown resume section: {section}")
        return getattr(self, section)


def non_blank(lines: Iterable[str]) -> List[str]:
    """Drop empty and whitespace-only entries (storage keeps them)."""
    return [line for line in lines if line and line.strip()]
