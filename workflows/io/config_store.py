"""
[Intake Config Store] Environment-backed runtime settings.

Centralizes the knobs for the intake service client, submission retries and
the session reaper. Every accessor falls back to ``_DEFAULTS`` when the
variable is missing or malformed, so a bare environment still boots.

Variables:
    INTAKE_API_BASE_URL             Back-office intake service root
    INTAKE_SUBMIT_TIMEOUT           Seconds per submission call
    INTAKE_MAX_SUBMISSION_ATTEMPTS  Calls allowed per confirmation visit
    INTAKE_RETRY_BACKOFF_SECONDS    Linear backoff between retries
    SESSION_MAX_AGE_HOURS           Finished-session lifetime
    RECOVERY_IDLE_MINUTES           Idle time before a stuck session is dropped
    REAPER_INTERVAL_SECONDS         Sweep period
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

__workflow_role__ = "ConfigStore"

_DEFAULTS: Dict[str, Any] = {
    "api_base_url": "http://localhost:5000/api",
    "submit_timeout": 10.0,
    "max_submission_attempts": 3,
    "retry_backoff_seconds": 0.0,
    "session_max_age_hours": 24.0,
    "recovery_idle_minutes": 60.0,
    "reaper_interval_seconds": 900.0,
}


@dataclass
class IntakeSettings:
    """Current runtime settings."""
    api_base_url: str
    submit_timeout: float
    max_submission_attempts: int
    retry_backoff_seconds: float
    session_max_age_hours: float
    recovery_idle_minutes: float
    reaper_interval_seconds: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_base_url": self.api_base_url,
            "submit_timeout": self.submit_timeout,
            "max_submission_attempts": self.max_submission_attempts,
            "retry_backoff_seconds": self.retry_backoff_seconds,
            "session_max_age_hours": self.session_max_age_hours,
            "recovery_idle_minutes": self.recovery_idle_minutes,
            "reaper_interval_seconds": self.reaper_interval_seconds,
        }


def _env_float(name: str, key: str) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return float(_DEFAULTS[key])
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[Config] %s=%r is not a number, using %s", name, raw, _DEFAULTS[key])
        return float(_DEFAULTS[key])
    if value < 0:
        logger.warning("[Config] %s=%r is negative, using %s", name, raw, _DEFAULTS[key])
        return float(_DEFAULTS[key])
    return value


def _env_int(name: str, key: str) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return int(_DEFAULTS[key])
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[Config] %s=%r is not an integer, using %s", name, raw, _DEFAULTS[key])
        return int(_DEFAULTS[key])
    if value < 1:
        logger.warning("[Config] %s=%r must be at least 1, using %s", name, raw, _DEFAULTS[key])
        return int(_DEFAULTS[key])
    return value


def get_api_base_url() -> str:
    """[Intake Config Store] Return the intake service root without a trailing slash."""
    raw = os.getenv("INTAKE_API_BASE_URL") or _DEFAULTS["api_base_url"]
    return raw.rstrip("/")


# Cache to avoid re-reading the environment on every message
_cached_settings: Optional[IntakeSettings] = None


def get_settings(*, force_reload: bool = False) -> IntakeSettings:
    """
    Get the current intake settings.

    Args:
        force_reload: If True, bypass the cache and re-read the environment

    Returns:
        IntakeSettings built from environment variables and defaults
    """
    global _cached_settings

    if _cached_settings is not None and not force_reload:
        return _cached_settings

    _cached_settings = IntakeSettings(
        api_base_url=get_api_base_url(),
        submit_timeout=_env_float("INTAKE_SUBMIT_TIMEOUT", "submit_timeout"),
        max_submission_attempts=_env_int("INTAKE_MAX_SUBMISSION_ATTEMPTS", "max_submission_attempts"),
        retry_backoff_seconds=_env_float("INTAKE_RETRY_BACKOFF_SECONDS", "retry_backoff_seconds"),
        session_max_age_hours=_env_float("SESSION_MAX_AGE_HOURS", "session_max_age_hours"),
        recovery_idle_minutes=_env_float("RECOVERY_IDLE_MINUTES", "recovery_idle_minutes"),
        reaper_interval_seconds=_env_float("REAPER_INTERVAL_SECONDS", "reaper_interval_seconds"),
    )
    return _cached_settings


__all__ = ["IntakeSettings", "get_settings", "get_api_base_url"]
