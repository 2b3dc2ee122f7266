"""Export endpoints for Web API v1."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from .....config import StudioSettings
from .....domain.resume_validator import validate_resume
from .....errors import ExportError, InputValidationError, UnsupportedFormatError
from .....export import SUPPORTED_FORMATS, export_resume
from .....export.pdf_export import Rasterizer
from .....observability import StudioObserver
from ..deps import get_observer, get_rasterizer, get_settings, get_store
from ....store import InMemorySessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["exports"])


@router.post("/{session_id}/exports/{fmt}")
async def export_session_resume(
    session_id: str,
    fmt: str,
    store: InMemorySessionStore = Depends(get_store),
    settings: StudioSettings = Depends(get_settings),
    observer: StudioObserver = Depends(get_observer),
    rasterizer: Optional[Rasterizer] = Depends(get_rasterizer),
) -> Response:
    session = await store.get_session(session_id)
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported export format: {fmt}", details={"supported": list(SUPPORTED_FORMATS)}
        )

    validation = validate_resume(session.resume)
    if not validation.valid:
        raise InputValidationError(
            "Resume has errors that must be fixed before export", details={"errors": validation.errors}
        )
    if validation.warnings:
        logger.info("Exporting session %s with %d validation warning(s)", session_id, len(validation.warnings))

    # Fails with 402 before any rendering work when no credit is left.
    await store.reserve_export(session_id)

    with observer.timed() as timing:
        try:
            artifact = await run_in_threadpool(
                export_resume,
                session.resume,
                fmt,
                rasterizer=rasterizer,
                watermark=settings.watermark or None,
            )
        except ExportError as e:
            observer.log_error("export", e.message, {"session_id": session_id, "format": fmt, "code": e.code})
            raise

    session = await store.commit_export(
        session_id,
        {"format": fmt, "filename": artifact.filename, "size": artifact.size},
    )
    observer.log_export(fmt, artifact.filename, artifact.size, timing["duration_ms"])

    return Response(
        content=artifact.content,
        media_type=artifact.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{artifact.filename}"',
            "X-Exports-Remaining": str(session.allowance.remaining),
            "X-Validation-Warnings": str(len(validation.warnings)),
        },
    )
