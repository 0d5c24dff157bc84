"""Version resolvers for package indexes."""

from .base import VersionResolver
from .pypi import PyPIVersionResolver

__all__ = [
    "VersionResolver",
    "PyPIVersionResolver",
]
