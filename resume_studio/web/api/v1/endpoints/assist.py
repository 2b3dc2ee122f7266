"""Writing-assist endpoints for Web API v1: keyword enhancement and skills."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .....domain.models import ResumeData, Skill
from .....domain.resume_text import experience_text
from .....errors import RemoteServiceError
from .....observability import StudioObserver
from .....services import KeywordEnhancer, SkillRecommendationClient
from .....services.remote import DEFAULT_ENHANCE_CONTEXT
from ..deps import get_keyword_enhancer, get_observer, get_skills_client, get_store
from ....errors import APIError
from ....store import InMemorySessionStore

router = APIRouter(prefix="/sessions", tags=["assist"])


class EnhanceKeywordsRequest(BaseModel):
    text: str = Field(default="")
    context: str = Field(default=DEFAULT_ENHANCE_CONTEXT)


class EnhanceKeywordsResponse(BaseModel):
    enhanced_text: str
    keywords: List[str]
    source: str


class SkillRecommendationResponse(BaseModel):
    added: List[Skill]
    resume: ResumeData


@router.post("/{session_id}/enhance-keywords", response_model=EnhanceKeywordsResponse)
async def enhance_keywords(
    session_id: str,
    request: EnhanceKeywordsRequest,
    store: InMemorySessionStore = Depends(get_store),
    enhancer: KeywordEnhancer = Depends(get_keyword_enhancer),
) -> EnhanceKeywordsResponse:
    """Suggest an enhanced version of *text*; the resume is left unchanged."""
    await store.get_session(session_id)
    result = await enhancer.enhance(request.text, request.context)
    return EnhanceKeywordsResponse(enhanced_text=result.text, keywords=result.keywords, source=result.source)


@router.post("/{session_id}/skills/recommend", response_model=SkillRecommendationResponse)
async def recommend_skills(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
    client: Optional[SkillRecommendationClient] = Depends(get_skills_client),
    observer: StudioObserver = Depends(get_observer),
) -> SkillRecommendationResponse:
    session = await store.get_session(session_id)
    if client is None:
        raise APIError(503, "SKILLS_UNAVAILABLE", "Skill recommendations are not configured")
    try:
        recommended = await client.recommend(experience_text(session.resume))
    except RemoteServiceError as e:
        observer.log_error("skill_recommendations", e.message, {"session_id": session_id})
        raise

    resume = session.resume.add_skills(recommended)
    added = resume.skills[len(session.resume.skills) :]
    if added:
        session = await store.set_resume(session_id, resume)
    observer.log_assist("skill_recommendations", source="remote", count=len(added))
    return SkillRecommendationResponse(added=added, resume=session.resume)
