"""Domain exceptions shared by the scoring, export and service layers."""

from __future__ import annotations

from typing import Any, Dict, Optional


class StudioError(Exception):
    """Base class for all resume-studio errors.

    ``code`` is a stable identifier the web layer surfaces to clients.
    """

    code = "STUDIO_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputValidationError(StudioError):
    """User input is missing or malformed (e.g. an empty job description)."""

    code = "INVALID_INPUT"


class ExportError(StudioError):
    """An export could not be produced."""

    code = "EXPORT_FAILED"


class PreviewNotFoundError(ExportError):
    code = "PREVIEW_NOT_FOUND"


class PreviewNotVisibleError(ExportError):
    code = "PREVIEW_NOT_VISIBLE"


class PreviewZeroSizeError(ExportError):
    code = "PREVIEW_ZERO_SIZE"


class RasterizationError(ExportError):
    code = "RASTERIZATION_FAILED"


class UnsupportedFormatError(ExportError):
    code = "UNSUPPORTED_FORMAT"


class RemoteServiceError(StudioError):
    """An external analysis or tailoring service failed."""

    code = "REMOTE_SERVICE_ERROR"


class UnknownPlanError(StudioError):
    code = "PLAN_NOT_FOUND"


class ExportLimitError(StudioError):
    code = "EXPORT_LIMIT_REACHED"


class FixLimitError(StudioError):
    code = "FIX_LIMIT_REACHED"
