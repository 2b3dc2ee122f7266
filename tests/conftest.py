"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import os
from typing import Any, Callable, Dict

import fitz
import pytest

from resume_studio.domain.models import ResumeData
from resume_studio.export.preview import PreviewElement

STRONG_RESUME: Dict[str, Any] = {
    "personalInfo": {
        "name": "Jane Smith",
        "jobTitle": "Senior Software Engineer",
        "location": "Austin, TX",
        "email": "jane.smith@example.com",
        "phone": "(555) 123-4567",
    },
    "summary": (
        "Senior software engineer leading cross-functional teams, driving agile development "
        "and performance optimization for scalable cloud platforms."
    ),
    "workExperience": [
        {
            "jobTitle": "Senior Software Engineer",
            "company": "Acme Corp",
            "startDate": "Jan 2020",
            "endDate": "Present",
            "location": "Austin, TX",
            "responsibilities": [
                "Led a team of 5 engineers delivering a microservices architecture, improving deployment speed by 40%",
                "Drove strategic project management and stakeholder communication across product lines",
                "Built automation and testing pipelines with a data-driven approach to performance analysis",
                "Mentored junior developers and championed collaboration and innovation in code reviews",
            ],
        }
    ],
    "education": [
        {
            "degree": "B.S. Computer Science",
            "institution": "State University",
            "graduationYear": "2016",
        }
    ],
    "skills": [
        {"name": "Python", "level": 90},
        {"name": "JavaScript", "level": 80},
        {"name": "AWS", "level": 75},
        {"name": "Docker", "level": 70},
        {"name": "PostgreSQL", "level": 70},
        {"name": "Leadership", "level": 85},
    ],
    "projects": [
        {
            "name": "Release Dashboard",
            "description": "Internal dashboard tracking release health and deployment metrics",
            "technologies": "React, FastAPI",
        }
    ],
}


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in list(os.environ):
        if key.startswith("RESUME_STUDIO_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def strong_resume() -> ResumeData:
    """A complete resume that scores at the top of every category."""
    return ResumeData.model_validate(STRONG_RESUME)


@pytest.fixture
def make_resume() -> Callable[..., ResumeData]:
    """Build a resume from the strong sample with top-level fields overridden."""

    def _make(**overrides: Any) -> ResumeData:
        payload = dict(STRONG_RESUME)
        payload.update(overrides)
        return ResumeData.model_validate(payload)

    return _make


def png_bytes(width: int = 40, height: int = 60) -> bytes:
    """A plain white PNG of the given size."""
    pixmap = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pixmap.set_rect(pixmap.irect, (255, 255, 255))
    return pixmap.tobytes("png")


class FakeRasterizer:
    """Records what it was asked to rasterize and returns a fixed PNG."""

    def __init__(self, png: bytes = b"", error: Exception = None):
        self.png = png or png_bytes()
        self.error = error
        self.calls = []

    def rasterize(self, element: PreviewElement, scale: float) -> bytes:
        self.calls.append(
            {
                "html": element.html,
                "scale": scale,
                "overlays": [overlay.display for overlay in element.overlays],
            }
        )
        if self.error is not None:
            raise self.error
        return self.png


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()
