"""Top-level v1 API router."""

from __future__ import annotations

from fastapi import APIRouter

from .endpoints.analysis import router as analysis_router
from .endpoints.assist import router as assist_router
from .endpoints.exports import router as exports_router
from .endpoints.plans import router as plans_router
from .endpoints.sessions import router as sessions_router

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(sessions_router)
api_v1_router.include_router(analysis_router)
api_v1_router.include_router(assist_router)
api_v1_router.include_router(exports_router)
api_v1_router.include_router(plans_router)
