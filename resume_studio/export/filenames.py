"""Download filenames for exported resumes."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from ..domain.models import ResumeData

FALLBACK_NAME = "resume"
MAX_NAME_LENGTH = 30


def sanitize_name(name: str) -> str:
    """Keep ASCII letters, digits and whitespace; whitespace runs become ``_``."""
    cleaned = re.sub(r"[^a-zA-Z0-9\s]", "", name or "")
    cleaned = re.sub(r"\s+", "_", cleaned.strip())
    return cleaned[:MAX_NAME_LENGTH] or FALLBACK_NAME


def generate_filename(data: ResumeData, ext: str, today: Optional[date] = None) -> str:
    """Return ``<SanitizedName>_Resume_<YYYY-MM-DD>.<ext>``."""
    stamp = (today or date.today()).isoformat()
    return f"{sanitize_name(data.personal_info.name)}_Resume_{stamp}.{ext.lstrip('.')}"
