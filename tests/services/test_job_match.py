"""Tests for the remote-first job-match service."""

import httpx
import pytest

from resume_studio.errors import InputValidationError
from resume_studio.observability import StudioObserver
from resume_studio.services.job_match import JobMatchService
from resume_studio.services.remote import RemoteATSAnalyzer

URL = "https://analysis.example.test/analyze"
JD = "Senior Python engineer with AWS and microservices experience"


def _analyzer(handler) -> RemoteATSAnalyzer:
    return RemoteATSAnalyzer(URL, transport=httpx.MockTransport(handler))


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={"formatScore": 90, "contentScore": 90, "keywordScore": 90, "structureScore": 90},
    )


def _server_error(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"error": "internal"})


def _refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused")


@pytest.mark.asyncio
async def test_remote_result_is_used(strong_resume):
    observer = StudioObserver()
    service = JobMatchService(analyzer=_analyzer(_ok), observer=observer)
    result = await service.analyze(strong_resume, JD)
    assert result.source == "remote"
    assert result.overall_score == 90
    assert observer.events[-1].data["fallback"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("handler", [_server_error, _refused])
async def test_falls_back_to_local_scoring(strong_resume, handler):
    observer = StudioObserver()
    service = JobMatchService(analyzer=_analyzer(handler), observer=observer)
    result = await service.analyze(strong_resume, JD)
    assert result.source == "local"
    assert "python" in result.matched_keywords
    assert observer.events[-1].data == {
        "mode": "job_match",
        "overall_score": result.overall_score,
        "source": "local",
        "fallback": True,
    }
    assert observer.get_session_stats()["fallback_rate"] == 1.0


@pytest.mark.asyncio
async def test_local_only_without_analyzer(strong_resume):
    result = await JobMatchService().analyze(strong_resume, JD)
    assert result.source == "local"


@pytest.mark.asyncio
async def test_empty_job_description_is_rejected_before_remote_call(strong_resume):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return _ok(request)

    service = JobMatchService(analyzer=_analyzer(handler))
    with pytest.raises(InputValidationError):
        await service.analyze(strong_resume, "   ")
    assert calls == []


def _overflowing_score(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        content=b'{"formatScore": 1e999, "contentScore": 90, "keywordScore": 90, "structureScore": 90}',
        headers={"content-type": "application/json"},
    )


@pytest.mark.asyncio
async def test_non_finite_remote_score_falls_back_to_local(strong_resume):
    service = JobMatchService(analyzer=_analyzer(_overflowing_score))
    result = await service.analyze(strong_resume, JD)
    assert result.source == "local"
