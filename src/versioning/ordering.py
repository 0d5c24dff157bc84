"""Version ordering used to pick the release to install.

Versions compare by their leading dot-separated integer components,
numerically and left to right. A missing component ranks below zero, so
``1.0 < 1.0.0``. Build metadata (``+...``) and any non-numeric tail are
ignored for that comparison. When the numeric parts tie, a purely numeric
version (``2.0.0``, ``2.0.0+local``) ranks above one with a suffix
(``2.0.0rc1``), and after that the lexicographically later raw string wins
so the ordering stays total.
"""

import re
from typing import Iterable, Optional, Tuple

_NUMERIC_PREFIX = re.compile(r"^v?(\d+(?:\.\d+)*)")


def _match(raw: str) -> Tuple[str, Optional[re.Match]]:
    public = raw.strip().split("+", 1)[0]
    return public, _NUMERIC_PREFIX.match(public)


def numeric_components(raw: str) -> Tuple[int, ...]:
    """Return the leading integer components of ``raw``.

    >>> numeric_components("1.10.0rc1+local")
    (1, 10, 0)
    >>> numeric_components("latest")
    ()
    """
    _, match = _match(raw)
    if not match:
        return ()
    return tuple(int(part) for part in match.group(1).split("."))


def is_final(raw: str) -> bool:
    """True when ``raw`` has nothing but numeric components before any ``+``."""
    public, match = _match(raw)
    return bool(match) and match.group(0) == public


def version_key(raw: str) -> Tuple[Tuple[int, ...], bool, str]:
    """Sort key implementing the ordering described in the module docstring."""
    return numeric_components(raw), is_final(raw), raw


def select_latest(candidates: Iterable[str]) -> str:
    """Return the highest version among ``candidates``.

    Raises:
        ValueError: If ``candidates`` is empty.
    """
    items = list(candidates)
    if not items:
        raise ValueError("select_latest() requires at least one candidate")
    return max(items, key=version_key)
