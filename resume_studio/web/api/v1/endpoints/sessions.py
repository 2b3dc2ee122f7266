"""Session endpoints for Web API v1."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from .....config import StudioSettings
from .....domain.models import ResumeData
from .....domain.plans import resolve_plan
from ..deps import get_settings, get_store
from ....store import InMemorySessionStore, SessionRecord

router = APIRouter(prefix="/sessions", tags=["sessions"])


class CreateSessionRequest(BaseModel):
    tier: Optional[str] = Field(default=None)


class AllowanceResponse(BaseModel):
    plan_name: str
    total: int
    used: int
    remaining: int
    is_unlimited: bool


class SessionResponse(BaseModel):
    session_id: str
    created_at: str
    updated_at: Optional[str] = None
    tier: Optional[str] = None
    allowance: AllowanceResponse
    fixes_used: int = 0
    has_analysis: bool = False
    job_description: Optional[str] = None
    export_count: int = 0


def session_response(session: SessionRecord) -> SessionResponse:
    subscription = session.subscription
    return SessionResponse(
        session_id=session.session_id,
        created_at=session.created_at,
        updated_at=session.updated_at,
        tier=subscription.tier if subscription else None,
        allowance=AllowanceResponse(**session.allowance.to_dict()),
        fixes_used=subscription.fixes_used if subscription else 0,
        has_analysis=session.analysis is not None,
        job_description=session.job_description,
        export_count=len(session.exports),
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: Optional[CreateSessionRequest] = None,
    store: InMemorySessionStore = Depends(get_store),
    settings: StudioSettings = Depends(get_settings),
) -> SessionResponse:
    tier = (request.tier if request else None) or settings.default_tier or None
    if tier:
        tier = resolve_plan(tier).tier
    session = await store.create_session(tier=tier)
    return session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionResponse:
    session = await store.get_session(session_id)
    return session_response(session)


@router.get("/{session_id}/resume", response_model=ResumeData)
async def get_resume(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> ResumeData:
    session = await store.get_session(session_id)
    return session.resume


@router.put("/{session_id}/resume", response_model=ResumeData)
async def put_resume(
    session_id: str,
    resume: ResumeData,
    store: InMemorySessionStore = Depends(get_store),
) -> ResumeData:
    session = await store.set_resume(session_id, resume)
    return session.resume
