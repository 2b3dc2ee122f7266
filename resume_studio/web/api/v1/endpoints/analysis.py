"""Analysis, job-match, tailoring and optimization endpoints for Web API v1."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .....domain.ats_scorer import ATSAnalysisResult, score_resume
from .....domain.models import ResumeData
from .....domain.optimizer import apply_optimizations, plan_optimizations, select
from .....domain.plans import can_use_fix
from .....errors import FixLimitError, RemoteServiceError
from .....observability import StudioObserver
from .....services import JobMatchService, TailoringClient
from ..deps import get_job_match_service, get_observer, get_store, get_tailoring_client
from ....errors import APIError
from ....store import InMemorySessionStore

router = APIRouter(prefix="/sessions", tags=["analysis"])


class JobDescriptionRequest(BaseModel):
    job_description: str = Field(default="")


class OptimizationResponse(BaseModel):
    id: str
    priority: str
    category: str
    title: str
    description: str
    impact: int
    selected: bool
    preview: str


class OptimizationListResponse(BaseModel):
    optimizations: List[OptimizationResponse]


class ApplyOptimizationsRequest(BaseModel):
    ids: Optional[List[str]] = Field(default=None)


class ApplyOptimizationsResponse(BaseModel):
    applied: List[str]
    resume: ResumeData
    analysis: ATSAnalysisResult
    fixes_used: int


@router.post("/{session_id}/analysis", response_model=ATSAnalysisResult)
async def run_analysis(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
    observer: StudioObserver = Depends(get_observer),
) -> ATSAnalysisResult:
    session = await store.get_session(session_id)
    with observer.timed() as timing:
        result = score_resume(session.resume)
    observer.log_analysis(mode="resume", overall_score=result.overall_score, duration_ms=timing["duration_ms"])
    await store.save_analysis(session_id, result)
    return result


@router.get("/{session_id}/analysis", response_model=ATSAnalysisResult)
async def get_analysis(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> ATSAnalysisResult:
    session = await store.get_session(session_id)
    if session.analysis is None:
        raise APIError(404, "ANALYSIS_NOT_FOUND", f"Session '{session_id}' has no analysis yet")
    return session.analysis


@router.post("/{session_id}/job-match", response_model=ATSAnalysisResult)
async def run_job_match(
    session_id: str,
    request: JobDescriptionRequest,
    store: InMemorySessionStore = Depends(get_store),
    service: JobMatchService = Depends(get_job_match_service),
) -> ATSAnalysisResult:
    session = await store.get_session(session_id)
    result = await service.analyze(session.resume, request.job_description)
    await store.save_analysis(session_id, result, job_description=request.job_description)
    return result


@router.post("/{session_id}/tailor", response_model=ResumeData)
async def tailor_resume(
    session_id: str,
    request: JobDescriptionRequest,
    store: InMemorySessionStore = Depends(get_store),
    client: Optional[TailoringClient] = Depends(get_tailoring_client),
    observer: StudioObserver = Depends(get_observer),
) -> ResumeData:
    session = await store.get_session(session_id)
    if client is None:
        raise APIError(503, "TAILORING_UNAVAILABLE", "Resume tailoring is not configured")
    try:
        tailored = await client.tailor(session.resume, request.job_description)
    except RemoteServiceError as e:
        observer.log_error("tailoring", e.message, {"session_id": session_id})
        raise
    await store.set_resume(session_id, tailored)
    return tailored


@router.post("/{session_id}/optimizations", response_model=OptimizationListResponse)
async def plan_session_optimizations(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> OptimizationListResponse:
    session = await store.get_session(session_id)
    analysis = session.analysis
    if analysis is None:
        analysis = score_resume(session.resume)
        await store.save_analysis(session_id, analysis)
    plan = plan_optimizations(analysis, session.resume)
    await store.save_optimizations(session_id, plan)
    return OptimizationListResponse(optimizations=[OptimizationResponse(**o.to_dict()) for o in plan])


@router.post("/{session_id}/optimizations/apply", response_model=ApplyOptimizationsResponse)
async def apply_session_optimizations(
    session_id: str,
    request: Optional[ApplyOptimizationsRequest] = None,
    store: InMemorySessionStore = Depends(get_store),
) -> ApplyOptimizationsResponse:
    session = await store.get_session(session_id)
    if not can_use_fix(session.subscription):
        raise FixLimitError("No resume fixes remaining on this plan")

    plan = session.optimizations
    if not plan:
        plan = plan_optimizations(session.analysis or score_resume(session.resume), session.resume)
    if request is not None and request.ids is not None:
        unknown = sorted(set(request.ids) - {o.id for o in plan})
        if unknown:
            raise APIError(400, "BAD_REQUEST", "Unknown optimization ids", {"unknown": unknown})
        plan = select(plan, request.ids)

    optimized = apply_optimizations(session.resume, plan)
    analysis = score_resume(optimized)
    session = await store.apply_fix(session_id, optimized, analysis)
    return ApplyOptimizationsResponse(
        applied=[o.id for o in plan if o.selected],
        resume=session.resume,
        analysis=analysis,
        fixes_used=session.subscription.fixes_used if session.subscription else 0,
    )
