"""Data models for version resolution."""

from dataclasses import dataclass
from typing import List, Optional

# Release identifiers in the order the index returned them (not sorted).
ReleaseList = List[str]


@dataclass(frozen=True)
class ResolutionResult:
    """Resolution outcome reported by ``modgen resolve --json``."""
    identifier: str
    index: str
    resolved_version: Optional[str]
    error: Optional[str]
