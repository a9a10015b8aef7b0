"""HTTP client for the CricAPI live-match feed."""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

logger = logging.getLogger(__name__)

CRICAPI_BASE_URL = os.getenv("CRICAPI_BASE_URL", "https://api.cricapi.com").rstrip("/")
CURRENT_MATCHES_PATH = "/v1/currentMatches"
DEFAULT_TIMEOUT_SECONDS = 12
MAX_ERROR_SNIPPET = 300
QUOTA_EXCEEDED_MARKER = "hits today exceeded hits limit"


class CricApiError(RuntimeError):
    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class CricApiQuotaExceeded(CricApiError):
    pass


class CricApiUnavailable(CricApiError):
    pass


def _truncate(value: str, limit: int = MAX_ERROR_SNIPPET) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + "...<truncated>"


def is_quota_exceeded(text: str | None) -> bool:
    return bool(text) and QUOTA_EXCEEDED_MARKER in text


def build_current_matches_url() -> str:
    return f"{CRICAPI_BASE_URL}{CURRENT_MATCHES_PATH}"


def fetch_current_matches(api_key: str | None, offset: int = 0) -> dict[str, Any]:
    """Fetch the current-matches envelope ``{status, data, info}``.

    Raises ``CricApiQuotaExceeded`` when the daily quota is spent (detected from
    the error text, not the status code), ``CricApiUnavailable`` on network
    failure and ``CricApiError`` for anything else.
    """
    if not api_key:
        raise CricApiUnavailable("Missing CricAPI key")

    url = build_current_matches_url()
    try:
        response = requests.get(
            url,
            params={"apikey": api_key, "offset": offset},
            headers={"Accept": "application/json"},
            timeout=DEFAULT_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error("CricAPI request failed: %s", exc)
        raise CricApiUnavailable(f"CricAPI request failed: {exc}") from exc

    body = response.text or ""
    if response.status_code >= 400:
        snippet = _truncate(body)
        logger.error("CricAPI non-2xx status=%s body=%s", response.status_code, snippet)
        if is_quota_exceeded(body):
            raise CricApiQuotaExceeded(
                "CricAPI daily quota exceeded", status=response.status_code, body=snippet
            )
        raise CricApiError(
            f"CricAPI returned status {response.status_code}",
            status=response.status_code,
            body=snippet,
        )

    try:
        envelope = response.json()
    except ValueError as exc:
        raise CricApiError(
            "CricAPI returned non-JSON response",
            status=response.status_code,
            body=_truncate(body),
        ) from exc

    if not isinstance(envelope, dict):
        raise CricApiError("CricAPI envelope is not an object", status=response.status_code)

    if envelope.get("status") != "success":
        reason = str(envelope.get("reason") or envelope.get("status") or "")
        if is_quota_exceeded(reason):
            raise CricApiQuotaExceeded(
                "CricAPI daily quota exceeded", status=response.status_code, body=reason
            )
        raise CricApiError(
            f"CricAPI returned status={envelope.get('status')!r}",
            status=response.status_code,
            body=_truncate(reason),
        )

    if not isinstance(envelope.get("data"), list):
        raise CricApiError("CricAPI envelope has no data list", status=response.status_code)

    info = quota_info(envelope)
    logger.info(
        "CricAPI fetched %s matches hitsToday=%s hitsLimit=%s",
        len(envelope["data"]),
        info.get("hitsToday"),
        info.get("hitsLimit"),
    )
    return envelope


def quota_info(envelope: dict[str, Any]) -> dict[str, Any]:
    info = envelope.get("info")
    return dict(info) if isinstance(info, dict) else {}
