"""Shared HTTP helpers used by the repository tag clients.

Encapsulates timeout, retry and caching behaviour so the GitHub and GitLab
clients avoid duplicating try/except blocks.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

# (status, headers, body) keyed by request, with the time it was stored
_http_cache: Dict[str, Tuple[Tuple[int, Dict[str, str], str], float]] = {}


def clear_cache() -> None:
    """Drop every cached response."""
    _http_cache.clear()


def _trace(message: str, **fields: Any) -> None:
    """Emit a DEBUG record tagged with the http_client component."""
    if is_debug_enabled(logger):
        logger.debug(message, extra=extra_context(component="http_client", **fields))


def _cache_key(url: str, headers: Optional[Dict[str, str]]) -> str:
    return f"GET:{url}:{sorted(headers.items()) if headers else ''}"


def _cached(key: str) -> Optional[Tuple[int, Dict[str, str], str]]:
    entry = _http_cache.get(key)
    if entry is None:
        return None
    data, stored_at = entry
    if time.time() - stored_at >= Constants.HTTP_CACHE_TTL_SEC:
        del _http_cache[key]
        return None
    return data


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout, retries, and caching.

    Timeouts, transport errors and 5xx responses are retried with
    exponential backoff; 4xx responses are final and cached.

    Returns:
        Tuple of (status_code, headers_dict, body_text). Status is 0 when
        every attempt failed.
    """
    key = _cache_key(url, headers)
    target = safe_url(url)

    cached = _cached(key)
    if cached is not None:
        _trace("HTTP cache hit", event="cache_hit", target=target)
        return cached

    failure = None
    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        if attempt > 1:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 2)))
        _trace("HTTP request", event="http_request", target=target, attempt=attempt)
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            except requests.Timeout:
                failure = "timeout"
            except requests.RequestException as exc:
                failure = str(exc)
            else:
                if response.status_code >= 500:
                    failure = f"HTTP {response.status_code}"
                else:
                    data = (response.status_code, dict(response.headers), response.text)
                    _http_cache[key] = (data, time.time())
                    _trace("HTTP response", event="http_response", target=target,
                           status_code=response.status_code, duration_ms=t.duration_ms())
                    return data
        _trace("HTTP attempt failed", event="http_exception", target=target, attempt=attempt, outcome=failure)

    logger.warning("GET %s failed after %s attempts: %s", target, Constants.HTTP_RETRY_MAX, failure)
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {failure}"


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse JSON response.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)
    if status_code != 200 or not text:
        return status_code, response_headers, None

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        _trace("JSON decode error", event="parse", outcome="json_decode_error", target=safe_url(url))
        return status_code, response_headers, None
    return status_code, response_headers, parsed
