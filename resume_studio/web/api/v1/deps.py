"""Dependency providers for v1 API."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from ....config import StudioSettings
from ....export.pdf_export import Rasterizer
from ....observability import StudioObserver
from ....services import JobMatchService, KeywordEnhancer, SkillRecommendationClient, TailoringClient
from ...store import InMemorySessionStore


def get_store(request: Request) -> InMemorySessionStore:
    """Access shared session store from app state."""
    return request.app.state.session_store


def get_settings(request: Request) -> StudioSettings:
    return request.app.state.settings


def get_observer(request: Request) -> StudioObserver:
    return request.app.state.observer


def get_job_match_service(request: Request) -> JobMatchService:
    return request.app.state.job_match_service


def get_tailoring_client(request: Request) -> Optional[TailoringClient]:
    return request.app.state.tailoring_client


def get_rasterizer(request: Request) -> Optional[Rasterizer]:
    """Rasterizer used for PDF exports; ``None`` selects the default."""
    return request.app.state.rasterizer


def get_keyword_enhancer(request: Request) -> KeywordEnhancer:
    return request.app.state.keyword_enhancer


def get_skills_client(request: Request) -> Optional[SkillRecommendationClient]:
    return request.app.state.skills_client
