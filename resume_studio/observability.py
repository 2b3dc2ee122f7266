"""Observability for export and analysis operations - logging and event stats."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class StudioEvent:
    """A single recorded operation."""

    timestamp: datetime
    event_type: str  # "export", "analysis", "assist", "error"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


class StudioObserver:
    """
    Observability layer for resume-studio operations.

    Collects events and logs them through the ``resume_studio`` logger.
    """

    def __init__(self, verbose: bool = False):
        self.events: List[StudioEvent] = []
        self.logger = logging.getLogger("resume_studio")
        self.verbose = verbose
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO if self.verbose else logging.WARNING)

    def log_export(
        self,
        fmt: str,
        filename: str,
        size: int,
        duration_ms: float,
        success: bool = True,
    ):
        """
        Log a finished export.

        Args:
            fmt: Export format ("pdf", "docx", "html", "txt")
            filename: Download filename handed to the caller
            size: Size of the produced document in bytes
            duration_ms: Export time in milliseconds
            success: Whether the export produced a document
        """
        event = StudioEvent(
            timestamp=datetime.now(),
            event_type="export",
            data={"format": fmt, "filename": filename, "size": size, "success": success},
            duration_ms=duration_ms,
        )
        self.events.append(event)
        status = "ok" if success else "failed"
        self.logger.info("Export %s %s: %s (%d bytes, %.2fms)", fmt, status, filename, size, duration_ms)

    def log_analysis(
        self,
        mode: str,
        overall_score: int,
        source: str = "local",
        fallback: bool = False,
        duration_ms: Optional[float] = None,
    ):
        """Log a completed ATS analysis."""
        event = StudioEvent(
            timestamp=datetime.now(),
            event_type="analysis",
            data={"mode": mode, "overall_score": overall_score, "source": source, "fallback": fallback},
            duration_ms=duration_ms,
        )
        self.events.append(event)
        suffix = " [FALLBACK]" if fallback else ""
        self.logger.info("Analysis %s: %d/100 from %s%s", mode, overall_score, source, suffix)

    def log_assist(
        self,
        feature: str,
        source: str = "local",
        fallback: bool = False,
        count: int = 0,
    ):
        """Log a writing-assist result (keyword enhancement, skill recommendations)."""
        event = StudioEvent(
            timestamp=datetime.now(),
            event_type="assist",
            data={"feature": feature, "source": source, "fallback": fallback, "count": count},
        )
        self.events.append(event)
        suffix = " [FALLBACK]" if fallback else ""
        self.logger.info("Assist %s: %d item(s) from %s%s", feature, count, source, suffix)

    def log_error(
        self,
        error_type: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Log an error event.

        Args:
            error_type: Type of error (e.g., "export", "remote_analysis")
            message: Error message
            context: Additional context about the error
        """
        event = StudioEvent(
            timestamp=datetime.now(),
            event_type="error",
            data={"error_type": error_type, "message": message, "context": context or {}},
        )
        self.events.append(event)
        self.logger.error("Error (%s): %s", error_type, message)

    @contextmanager
    def timed(self) -> Iterator[Dict[str, float]]:
        """Measure a block; ``duration_ms`` is filled in on exit."""
        timing: Dict[str, float] = {"duration_ms": 0.0}
        started = time.perf_counter()
        try:
            yield timing
        finally:
            timing["duration_ms"] = (time.perf_counter() - started) * 1000

    def get_session_stats(self) -> Dict[str, Any]:
        """Aggregated statistics for the recorded events."""
        exports = [e for e in self.events if e.event_type == "export"]
        analyses = [e for e in self.events if e.event_type == "analysis"]
        errors = [e for e in self.events if e.event_type == "error"]
        assists = [e for e in self.events if e.event_type == "assist"]
        fallbacks = sum(1 for e in analyses if e.data.get("fallback", False))

        return {
            "event_count": len(self.events),
            "exports": len(exports),
            "export_bytes": sum(e.data.get("size", 0) for e in exports),
            "analyses": len(analyses),
            "fallback_rate": fallbacks / len(analyses) if analyses else 0.0,
            "assists": len(assists),
            "errors": len(errors),
            "total_duration_ms": sum(e.duration_ms or 0 for e in self.events),
        }

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
        self.logger.info("Observer events cleared")
