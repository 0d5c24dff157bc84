"""Logging helpers shared across modules.

Provides a one-shot ``configure_logging`` for the CLI plus the small helpers
used to attach structured context to log records without leaking secrets.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_KEYS = ("token", "password", "secret", "authorization")


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stderr handler on the root logger.

    The level comes from ``level`` or the MODGEN_LOG_LEVEL environment
    variable, defaulting to INFO. Calling this twice does not duplicate
    handlers.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    # The previous sys.stderr may already be closed, so never flush it.
    for old in [h for h in root.handlers if getattr(h, "_modgen_handler", False)]:
        root.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    handler._modgen_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def redact(value: Any) -> Any:
    """Mask a value if it looks like a credential."""
    if isinstance(value, str) and value:
        return "***"
    return value


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload for structured log records.

    None values are dropped and sensitive keys are redacted.
    """
    context: Dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if any(s in key.lower() for s in _SENSITIVE_KEYS):
            value = redact(value)
        context[key] = value
    return context


def safe_url(url: str) -> str:
    """Strip userinfo and query string from a URL before logging it."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self):
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000, 2)
