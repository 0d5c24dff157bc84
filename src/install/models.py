"""Data models for installations."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict

# Variable name -> path fragment to prepend, in insertion order.
EnvironmentDescriptor = Dict[str, str]


class MaterializeState(Enum):
    """States a single materialize call moves through."""
    REQUESTED = "requested"
    INSTALLING = "installing"
    ALREADY_INSTALLED = "already_installed"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallationRecord:
    """A package version installed under ``root`` (``prefix/name/version``)."""
    name: str
    version: str
    root: str

    @property
    def exists(self) -> bool:
        """True when the installation directory is present and non-empty."""
        return os.path.isdir(self.root) and bool(os.listdir(self.root))
