"""API error helpers and exception handlers."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import (
    ExportError,
    ExportLimitError,
    FixLimitError,
    InputValidationError,
    PreviewNotFoundError,
    PreviewNotVisibleError,
    PreviewZeroSizeError,
    RasterizationError,
    RemoteServiceError,
    StudioError,
    UnknownPlanError,
    UnsupportedFormatError,
)

# Most specific classes first; the first isinstance match wins.
_STATUS_MAP: Tuple[Tuple[Type[StudioError], int, Optional[str]], ...] = (
    (InputValidationError, 400, None),
    (UnsupportedFormatError, 400, None),
    (UnknownPlanError, 404, None),
    (ExportLimitError, 402, None),
    (FixLimitError, 402, None),
    (PreviewNotFoundError, 409, None),
    (PreviewNotVisibleError, 409, None),
    (PreviewZeroSizeError, 409, None),
    (RasterizationError, 500, "EXPORT_FAILED"),
    (ExportError, 500, "EXPORT_FAILED"),
    (RemoteServiceError, 502, None),
)


class APIError(Exception):
    """Application-level API error with status/code mapping."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }

    @classmethod
    def from_studio_error(cls, exc: StudioError) -> "APIError":
        for error_type, status_code, code in _STATUS_MAP:
            if isinstance(exc, error_type):
                details = dict(exc.details)
                if code and code != exc.code:
                    details.setdefault("reason", exc.code)
                return cls(status_code, code or exc.code, exc.message, details)
        return cls(500, exc.code, exc.message, dict(exc.details))


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Render contract-compliant error response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
    """Map domain exceptions onto the API error contract."""
    return await api_error_handler(request, APIError.from_studio_error(exc))


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to API contract shape."""
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "BAD_REQUEST",
                "message": "Invalid request payload",
                "details": {"errors": jsonable_encoder(exc.errors())},
            }
        },
    )
