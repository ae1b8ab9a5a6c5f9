"""Centralized configuration for the MediBot assistant.

Secret resolution order (per variable):
  1. Environment variable / ``.env`` file  (local dev)
  2. AWS SSM Parameter Store SecureString  (when ``AWS_EXECUTION_ENV`` is set)

The SSM paths follow the convention ``/medibot/<VARIABLE_NAME>``.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_ON_AWS = bool(os.getenv("AWS_EXECUTION_ENV"))
_SSM_PREFIX = "/medibot"


# ── Secret resolution ────────────────────────────────────────────────

def _get_ssm_parameter(name: str) -> str | None:
    """Fetch a SecureString from SSM Parameter Store, or ``None``."""
    try:
        import boto3  # noqa: PLC0415 — only needed on AWS

        ssm = boto3.client("ssm")
        resp = ssm.get_parameter(Name=f"{_SSM_PREFIX}/{name}", WithDecryption=True)
        return resp["Parameter"]["Value"]
    except Exception:
        logger.debug("SSM lookup for %s failed", name)
        return None


def _require_env(name: str) -> str:
    """Return a credential from env-var or SSM, or raise ``OSError``."""
    value = os.getenv(name)
    if value and not value.startswith("your_"):
        return value

    if _ON_AWS:
        ssm_value = _get_ssm_parameter(name)
        if ssm_value:
            return ssm_value

    raise OSError(
        f"Missing required configuration: {name}. "
        f"Set it in .env or in SSM Parameter Store {_SSM_PREFIX}/{name}."
    )


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise OSError(f"Invalid configuration: {name}={raw!r} is not a number.") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise OSError(f"Invalid configuration: {name}={raw!r} is not an integer.") from None


# ── Wit.ai (intent classification) ──────────────────────────────────
WIT_TOKEN: str = _require_env("WIT_TOKEN")
WIT_API_VERSION: str = os.getenv("WIT_API_VERSION", "20250710")
WIT_BASE_URL: str = os.getenv("WIT_BASE_URL", "https://api.wit.ai")

# ── Gemini (generative fallback) ────────────────────────────────────
GEMINI_API_KEY: str = _require_env("GEMINI_API_KEY")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL: str = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1",
)

# None means no timeout: a hung upstream call hangs the turn.
REQUEST_TIMEOUT_SECONDS: float | None = _env_float("REQUEST_TIMEOUT_SECONDS")

# ── Dialogue ────────────────────────────────────────────────────────
BOOKING_INTENT: str = os.getenv("BOOKING_INTENT", "randevu_al")
REQUIRE_TRIGGER_KEYWORD: bool = _env_flag("REQUIRE_TRIGGER_KEYWORD", True)

# Least-recently-used conversations are dropped beyond this many.
MAX_SESSIONS: int = _env_int("MAX_SESSIONS", 1000)

# ── Server ──────────────────────────────────────────────────────────
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = _env_int("SERVER_PORT", 3000)
CORS_ORIGINS: list[str] = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")
