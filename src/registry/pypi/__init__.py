"""PyPI registry package.

- client.py: release listing through the PyPI JSON API
"""

# Patch points exposed for tests
from common.http_client import get_json  # noqa: F401

from .client import fetch_releases, release_url  # noqa: F401

__all__ = [
    "fetch_releases",
    "release_url",
    # Patch points for tests
    "get_json",
]
