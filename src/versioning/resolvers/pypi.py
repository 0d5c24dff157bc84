"""PyPI version resolver backed by the JSON API."""

from constants import Constants
from registry.pypi import fetch_releases
from ..models import ReleaseList
from .base import VersionResolver


class PyPIVersionResolver(VersionResolver):
    """Resolver for packages published on a PyPI-compatible index."""

    def __init__(self, index_url: str = ""):
        self.index_url = index_url or Constants.REGISTRY_URL_PYPI

    @property
    def index_name(self) -> str:
        """Return the PyPI tag."""
        return "pypi"

    def fetch_candidates(self, name: str) -> ReleaseList:
        """Fetch version candidates from the index's release listing."""
        return fetch_releases(name, url=self.index_url)
