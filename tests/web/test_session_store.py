"""Tests for the in-memory session store."""

import asyncio

import pytest

from resume_studio.domain.ats_scorer import score_resume
from resume_studio.domain.models import ResumeData
from resume_studio.errors import ExportLimitError, FixLimitError
from resume_studio.web.errors import APIError
from resume_studio.web.store import InMemorySessionStore


@pytest.mark.asyncio
async def test_missing_session():
    store = InMemorySessionStore()
    with pytest.raises(APIError) as exc_info:
        await store.get_session("sess_nope")
    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_set_resume_clears_analysis(strong_resume):
    store = InMemorySessionStore()
    session = await store.create_session()
    await store.save_analysis(session.session_id, score_resume(strong_resume))
    updated = await store.set_resume(session.session_id, strong_resume)
    assert updated.analysis is None
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_reserve_does_not_spend_credit():
    store = InMemorySessionStore()
    session = await store.create_session("basic")
    await store.reserve_export(session.session_id)
    assert session.allowance.remaining == 2


@pytest.mark.asyncio
async def test_concurrent_commits_never_overspend():
    store = InMemorySessionStore()
    session = await store.create_session("basic")
    results = await asyncio.gather(
        *(store.commit_export(session.session_id, {"format": "txt"}) for _ in range(3)),
        return_exceptions=True,
    )
    assert sum(isinstance(r, ExportLimitError) for r in results) == 1
    assert session.allowance.remaining == 0
    assert len(session.exports) == 2
    assert all("exported_at" in record for record in session.exports)


@pytest.mark.asyncio
async def test_apply_fix_spends_one_fix(strong_resume):
    store = InMemorySessionStore()
    session = await store.create_session("basic")
    await store.apply_fix(session.session_id, strong_resume, score_resume(strong_resume))
    assert session.subscription.fixes_used == 1
    with pytest.raises(FixLimitError):
        await store.apply_fix(session.session_id, ResumeData(), score_resume(ResumeData()))
    assert session.resume == strong_resume
