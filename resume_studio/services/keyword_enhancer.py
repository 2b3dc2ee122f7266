"""Keyword enhancement with a remote-first, local-fallback chain."""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.keyword_enhancer import TextEnhancement, enhance_text
from ..errors import InputValidationError, RemoteServiceError
from ..observability import StudioObserver
from .remote import DEFAULT_ENHANCE_CONTEXT, KeywordEnhancementClient

logger = logging.getLogger(__name__)


class KeywordEnhancer:
    """Rewrite a piece of resume text with stronger keywords.

    Mirrors :class:`~resume_studio.services.job_match.JobMatchService`: the
    hosted service answers when it can, the local rewrite otherwise.
    """

    def __init__(
        self,
        client: Optional[KeywordEnhancementClient] = None,
        observer: Optional[StudioObserver] = None,
    ):
        self.client = client
        self.observer = observer

    async def enhance(self, text: str, context: str = DEFAULT_ENHANCE_CONTEXT) -> TextEnhancement:
        if not text or not text.strip():
            raise InputValidationError("Text is required for keyword enhancement")

        if self.client is not None:
            try:
                result = await self.client.enhance(text, context or DEFAULT_ENHANCE_CONTEXT)
                self._record("remote", fallback=False, keywords=len(result.keywords))
                return result
            except RemoteServiceError as e:
                logger.warning("Remote keyword enhancement failed, using local rewrite: %s", e)

        result = enhance_text(text)
        self._record("local", fallback=self.client is not None, keywords=len(result.keywords))
        return result

    def _record(self, source: str, fallback: bool, keywords: int) -> None:
        if self.observer is not None:
            self.observer.log_assist("keyword_enhancement", source=source, fallback=fallback, count=keywords)
