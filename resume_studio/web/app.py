"""FastAPI app entrypoint for resume-studio web APIs."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from ..config import StudioSettings, load_settings
from ..errors import StudioError
from ..export.pdf_export import Rasterizer
from ..observability import StudioObserver
from ..services import (
    JobMatchService,
    KeywordEnhancementClient,
    KeywordEnhancer,
    RemoteATSAnalyzer,
    SkillRecommendationClient,
    TailoringClient,
)
from .api.v1.router import api_v1_router
from .errors import APIError, api_error_handler, studio_error_handler, validation_error_handler
from .store import InMemorySessionStore

logger = logging.getLogger("resume_studio.web.api")


def create_app(
    settings: Optional[StudioSettings] = None,
    rasterizer: Optional[Rasterizer] = None,
    analyzer: Optional[RemoteATSAnalyzer] = None,
    tailoring_client: Optional[TailoringClient] = None,
    enhancement_client: Optional[KeywordEnhancementClient] = None,
    skills_client: Optional[SkillRecommendationClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Remote clients are built from *settings* unless passed explicitly.
    """
    settings = settings or load_settings()
    observer = StudioObserver(verbose=settings.verbose)

    if analyzer is None and settings.analysis_url:
        analyzer = RemoteATSAnalyzer(
            settings.analysis_url,
            timeout=settings.request_timeout,
            headers=settings.service_headers,
        )
    if tailoring_client is None and settings.tailoring_url:
        tailoring_client = TailoringClient(
            settings.tailoring_url,
            timeout=settings.request_timeout,
            headers=settings.service_headers,
        )
    if enhancement_client is None and settings.enhancement_url:
        enhancement_client = KeywordEnhancementClient(
            settings.enhancement_url,
            timeout=settings.request_timeout,
            headers=settings.service_headers,
        )
    if skills_client is None and settings.skills_url:
        skills_client = SkillRecommendationClient(
            settings.skills_url,
            timeout=settings.request_timeout,
            headers=settings.service_headers,
        )

    store = InMemorySessionStore()

    app = FastAPI(title="Resume Studio API", version="0.1.0")
    app.state.session_store = store
    app.state.settings = settings
    app.state.observer = observer
    app.state.rasterizer = rasterizer
    app.state.job_match_service = JobMatchService(analyzer=analyzer, observer=observer)
    app.state.tailoring_client = tailoring_client
    app.state.keyword_enhancer = KeywordEnhancer(client=enhancement_client, observer=observer)
    app.state.skills_client = skills_client
    app.include_router(api_v1_router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - start) * 1000
            path_params = request.scope.get("path_params", {})
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f session_id=%s",
                request.method,
                request.url.path,
                500,
                duration_ms,
                path_params.get("session_id", "-"),
            )
            raise

        duration_ms = (perf_counter() - start) * 1000
        path_params = request.scope.get("path_params", {})
        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f session_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            path_params.get("session_id", "-"),
        )
        return response

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {
            "status": "ok",
            "remote_analysis": analyzer is not None,
            "tailoring": tailoring_client is not None,
            "keyword_enhancement": enhancement_client is not None,
            "skill_recommendations": skills_client is not None,
        }

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StudioError, studio_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


def main() -> None:
    """Run development API server."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
