"""Runtime configuration defaults for the API client, dates and debug logging."""

from __future__ import annotations

import os

API_URL = "http://localhost:3000/api"
API_TIMEOUT_SECONDS = 10.0
# The original query retried once before surfacing an error.
API_RETRIES = 1

# Business day boundaries are computed in the shop's zone.
BUSINESS_TIME_ZONE = "America/Monterrey"

DEBUG_LOG_PATH = "/tmp/danclean-debug.log"

_API_URL_ENV = "DANCLEAN_API_URL"
_API_TIMEOUT_ENV = "DANCLEAN_API_TIMEOUT"
_TIME_ZONE_ENV = "DANCLEAN_TIME_ZONE"
_DEBUG_LOG_ENV = "DANCLEAN_DEBUG_LOG"


def resolve_api_url() -> str:
    return os.environ.get(_API_URL_ENV, "").strip() or API_URL


def resolve_api_timeout() -> float:
    raw = os.environ.get(_API_TIMEOUT_ENV, "").strip()
    if not raw:
        return API_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{_API_TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from exc


def resolve_time_zone() -> str:
    return os.environ.get(_TIME_ZONE_ENV, "").strip() or BUSINESS_TIME_ZONE


def resolve_debug_log_path() -> str:
    return os.environ.get(_DEBUG_LOG_ENV, "").strip() or DEBUG_LOG_PATH
