"""Configuration loading and validation.

Settings come from ``config/config.yaml`` overlaid by
``config/config.local.yaml``, then from ``RESUME_STUDIO_*`` environment
variables (a ``.env`` file is loaded first).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .domain.plans import PLANS

logger = logging.getLogger(__name__)

ENV_PREFIX = "RESUME_STUDIO_"
SERVICE_URL_KEYS = ("analysis_url", "tailoring_url", "enhancement_url", "skills_url")

# Environment variable suffix -> (config key, type)
_ENV_OVERRIDES = {
    "ANALYSIS_URL": ("analysis_url", str),
    "TAILORING_URL": ("tailoring_url", str),
    "ENHANCEMENT_URL": ("enhancement_url", str),
    "SKILLS_URL": ("skills_url", str),
    "SERVICE_KEY": ("service_key", str),
    "REQUEST_TIMEOUT": ("request_timeout", float),
    "DEFAULT_TIER": ("default_tier", str),
    "WATERMARK": ("watermark", str),
    "VERBOSE": ("verbose", bool),
}


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


@dataclass
class StudioSettings:
    analysis_url: str = ""
    tailoring_url: str = ""
    enhancement_url: str = ""
    skills_url: str = ""
    service_key: str = ""
    request_timeout: float = 30.0
    default_tier: str = ""
    watermark: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    verbose: bool = False

    @property
    def service_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.service_key}"} if self.service_key else {}


def load_raw_config(config_path: str = "config/config.local.yaml") -> dict:
    """Load raw configuration dictionary from YAML file.

    Priority order:
    1. config.local.yaml (local overrides and secrets)
    2. config.yaml (defaults)

    An explicitly named file that does not exist raises
    :class:`FileNotFoundError`; the default pair may both be absent.
    """
    repo_root = Path(__file__).resolve().parents[1]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    def _load_yaml(path: Path) -> dict:
        if not path.exists():
            return {}
        with open(path) as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file must be a mapping: {path}")
            return data

    target = _resolve(config_path)
    if Path(config_path).name == "config.local.yaml":
        base = _load_yaml(_resolve("config/config.yaml"))
        return _deep_merge(base, _load_yaml(target))

    if not target.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return _load_yaml(target)


def apply_env_overrides(raw: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Return a copy of *raw* with ``RESUME_STUDIO_*`` variables applied."""
    env = os.environ if environ is None else environ
    merged = dict(raw)
    for suffix, (key, kind) in _ENV_OVERRIDES.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is None:
            continue
        if kind is bool:
            merged[key] = value.strip().lower() in {"1", "true", "yes", "on"}
        elif kind is float:
            try:
                merged[key] = float(value)
            except ValueError:
                # Left as a string so validate_config reports it.
                merged[key] = value
        else:
            merged[key] = value
    return merged


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues (empty = valid)."""
    errors: List[ConfigError] = []

    for key in SERVICE_URL_KEYS:
        url = raw_config.get(key, "")
        if url and (not isinstance(url, str) or not url.startswith(("http://", "https://"))):
            errors.append(
                ConfigError(
                    field=key,
                    message=f"{key} must be an http(s) URL, got {url!r}",
                    severity=Severity.ERROR,
                )
            )

    if not raw_config.get("analysis_url"):
        errors.append(
            ConfigError(
                field="analysis_url",
                message="analysis_url not set; job-match analysis will use the local scorer only",
                severity=Severity.WARNING,
            )
        )

    timeout = raw_config.get("request_timeout", 30)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append(
            ConfigError(
                field="request_timeout",
                message=f"request_timeout must be a positive number, got {timeout!r}",
                severity=Severity.ERROR,
            )
        )

    tier = raw_config.get("default_tier") or ""
    if tier and tier not in PLANS:
        errors.append(
            ConfigError(
                field="default_tier",
                message=f"Unknown default_tier '{tier}'. Expected one of: {', '.join(PLANS)}",
                severity=Severity.ERROR,
            )
        )

    server = raw_config.get("server", {}) or {}
    port = server.get("port", 8000)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        errors.append(
            ConfigError(
                field="server.port",
                message=f"server.port must be an integer between 1 and 65535, got {port!r}",
                severity=Severity.ERROR,
            )
        )

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)


def load_settings(config_path: str = "config/config.local.yaml") -> StudioSettings:
    """Load, override and validate settings.

    Raises :class:`ValueError` listing every error-level issue.
    """
    load_dotenv()
    raw = apply_env_overrides(load_raw_config(config_path))

    issues = validate_config(raw)
    for issue in issues:
        if issue.severity == Severity.WARNING:
            logger.warning("Config %s: %s", issue.field, issue.message)
    if has_errors(issues):
        raise ValueError("; ".join(f"{e.field}: {e.message}" for e in issues if e.severity == Severity.ERROR))

    server = raw.get("server", {}) or {}
    return StudioSettings(
        analysis_url=raw.get("analysis_url") or "",
        tailoring_url=raw.get("tailoring_url") or "",
        enhancement_url=raw.get("enhancement_url") or "",
        skills_url=raw.get("skills_url") or "",
        service_key=_resolve_placeholder(raw.get("service_key") or ""),
        request_timeout=float(raw.get("request_timeout", 30)),
        default_tier=raw.get("default_tier") or "",
        watermark=raw.get("watermark") or "",
        host=server.get("host", "127.0.0.1"),
        port=server.get("port", 8000),
        verbose=bool(raw.get("verbose", False)),
    )


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def _resolve_placeholder(value: str) -> str:
    """Resolve a ``${VAR_NAME}`` placeholder from the environment."""
    if value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value
