"""Base class for version resolvers."""

import logging
from abc import ABC, abstractmethod

from common.errors import PackageNotFound
from common.logging_utils import extra_context
from ..models import ReleaseList
from ..ordering import select_latest

logger = logging.getLogger(__name__)


class VersionResolver(ABC):
    """Query an index for a package's releases and choose the one to install.

    Subclasses only provide ``fetch_candidates``; selection is shared so every
    index follows the same ordering policy.
    """

    @property
    @abstractmethod
    def index_name(self) -> str:
        """Short tag identifying the index in logs."""

    @abstractmethod
    def fetch_candidates(self, name: str) -> ReleaseList:
        """Return every release the index publishes for ``name``.

        Raises:
            IndexUnavailable: If the index cannot be queried.
        """

    def pick(self, name: str, candidates: ReleaseList) -> str:
        """Select the latest release from ``candidates``.

        Raises:
            PackageNotFound: If ``candidates`` is empty.
        """
        if not candidates:
            raise PackageNotFound(name)
        return select_latest(candidates)

    def resolve(self, name: str) -> str:
        """Resolve ``name`` to the version that should be installed."""
        if not name or not name.strip():
            raise ValueError("package name must be non-empty")

        candidates = self.fetch_candidates(name)
        version = self.pick(name, candidates)
        logger.info(
            "Resolved %s to %s",
            name,
            version,
            extra=extra_context(
                event="resolve",
                component="resolver",
                outcome="success",
                index=self.index_name,
                candidate_count=len(candidates),
            )
        )
        return version
