"""Shared HTTP helpers used by the package index client.

Encapsulates request/timeout error handling so callers see a single
``IndexUnavailable`` for every transport failure. Requests are made exactly
once; retrying is left to whoever calls the resolver.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.errors import IndexUnavailable
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "pypi").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.

    Raises:
        IndexUnavailable: On timeout or any other transport error.
    """
    safe_target = safe_url(url)
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
            raise IndexUnavailable(
                safe_target, f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise IndexUnavailable(safe_target, str(exc)) from exc

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


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Optional[Any]]:
    """Perform GET request and parse a JSON response.

    Args:
        url: Target URL
        context: Source tag for logs
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, parsed_json_or_none). The body is only parsed
        for 200 responses.

    Raises:
        IndexUnavailable: On transport errors or an undecodable 200 body.
    """
    res = safe_get(url, context=context, headers=headers, **kwargs)
    if res.status_code != 200:
        return res.status_code, None

    try:
        return res.status_code, json.loads(res.text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "JSON decode error",
            extra=extra_context(
                event="parse",
                component="http_client",
                action="get_json",
                outcome="json_decode_error",
                target=safe_url(url),
            )
        )
        raise IndexUnavailable(safe_url(url), "response was not valid JSON") from exc
