"""Shared HTTP helpers used by the metadata resolver and the artifact fetcher.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Network failures are raised as
``TransportError``; the caller decides what a status code means.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..constants import Constants
from ..errors import TransportError
from .logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def default_headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Headers sent with every request."""
    headers = {"User-Agent": Constants.USER_AGENT}
    if extra:
        headers.update(extra)
    return headers


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "meta", "maven").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status.

    Raises:
        TransportError: On timeout or connection failure.
    """
    safe_target = safe_url(url)
    kwargs["headers"] = default_headers(kwargs.get("headers"))
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise TransportError(f"{context} request timed out", url=safe_target) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise TransportError(f"{context} connection error: {exc}", url=safe_target) from exc
    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
    return res
