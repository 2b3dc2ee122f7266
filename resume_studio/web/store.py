"""In-memory session store for Web API v1.

A session carries the resume being edited, its subscription and the last
analysis, so pages hand results to each other through the session instead
of ambient client storage.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..domain.ats_scorer import ATSAnalysisResult
from ..domain.models import ResumeData
from ..domain.optimizer import Optimization
from ..domain.plans import ExportAllowance, Subscription, consume_export, consume_fix
from .errors import APIError


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def make_id(prefix: str) -> str:
    """Create opaque id matching the documented prefix style."""
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


@dataclass
class SessionRecord:
    session_id: str
    created_at: str
    resume: ResumeData = field(default_factory=ResumeData)
    subscription: Optional[Subscription] = None
    analysis: Optional[ATSAnalysisResult] = None
    job_description: Optional[str] = None
    optimizations: List[Optimization] = field(default_factory=list)
    exports: List[Dict[str, Any]] = field(default_factory=list)
    updated_at: Optional[str] = None

    @property
    def allowance(self) -> ExportAllowance:
        return ExportAllowance.from_subscription(self.subscription)


class InMemorySessionStore:
    """Session persistence for a single API process."""

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = asyncio.Lock()

    async def create_session(self, tier: Optional[str] = None) -> SessionRecord:
        subscription = Subscription.start(tier) if tier else None
        session = SessionRecord(
            session_id=make_id("sess"),
            created_at=utc_now_iso(),
            subscription=subscription,
        )
        async with self._lock:
            self._sessions[session.session_id] = session
        return session

    async def get_session(self, session_id: str) -> SessionRecord:
        async with self._lock:
            session = self._sessions.get(session_id)
        if not session:
            raise APIError(404, "SESSION_NOT_FOUND", f"Session '{session_id}' not found")
        return session

    async def set_resume(self, session_id: str, resume: ResumeData) -> SessionRecord:
        """Replace the session resume; any stored analysis becomes stale."""
        async with self._lock:
            session = self._require(session_id)
            session.resume = resume
            session.analysis = None
            session.optimizations = []
            session.updated_at = utc_now_iso()
        return session

    async def save_analysis(
        self,
        session_id: str,
        analysis: ATSAnalysisResult,
        job_description: Optional[str] = None,
    ) -> SessionRecord:
        async with self._lock:
            session = self._require(session_id)
            session.analysis = analysis
            session.job_description = job_description
            session.updated_at = utc_now_iso()
        return session

    async def save_optimizations(self, session_id: str, optimizations: List[Optimization]) -> SessionRecord:
        async with self._lock:
            session = self._require(session_id)
            session.optimizations = list(optimizations)
        return session

    async def apply_fix(
        self,
        session_id: str,
        resume: ResumeData,
        analysis: ATSAnalysisResult,
    ) -> SessionRecord:
        """Store an optimized resume and spend one fix credit.

        Raises :class:`FixLimitError` when the plan has no fixes left.
        """
        async with self._lock:
            session = self._require(session_id)
            session.subscription = consume_fix(session.subscription)
            session.resume = resume
            session.analysis = analysis
            session.optimizations = []
            session.updated_at = utc_now_iso()
        return session

    async def reserve_export(self, session_id: str) -> Subscription:
        """Return the subscription as it will be after one more export.

        Nothing is committed; raises :class:`ExportLimitError` when no
        credit remains.
        """
        async with self._lock:
            session = self._require(session_id)
            return consume_export(session.subscription)

    async def commit_export(self, session_id: str, record: Dict[str, Any]) -> SessionRecord:
        """Spend one export credit and record the export."""
        async with self._lock:
            session = self._require(session_id)
            session.subscription = consume_export(session.subscription)
            session.exports.append({**record, "exported_at": utc_now_iso()})
        return session

    def _require(self, session_id: str) -> SessionRecord:
        session = self._sessions.get(session_id)
        if not session:
            raise APIError(404, "SESSION_NOT_FOUND", f"Session '{session_id}' not found")
        return session
