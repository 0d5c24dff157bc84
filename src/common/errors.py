"""Error taxonomy shared by the resolver, the index client and the materializer.

Library code raises these; only the CLI turns them into exit codes.
"""
from __future__ import annotations

from typing import Optional


class ModgenError(Exception):
    """Base class for all modgen failures."""


class PackageNotFound(ModgenError):
    """The index published no releases for the package."""

    def __init__(self, name: str):
        super().__init__(f"No releases found for package '{name}'")
        self.name = name


class IndexUnavailable(ModgenError):
    """The package index could not be reached or returned an unusable answer."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Package index unavailable ({url}): {reason}")
        self.url = url
        self.reason = reason


class InvalidVersion(ModgenError):
    """A version token is empty or would escape the installation root."""

    def __init__(self, version: Optional[str]):
        super().__init__(f"Invalid version token: {version!r}")
        self.version = version


class InstallationFailed(ModgenError):
    """The external installer exited non-zero or crashed."""

    def __init__(self, name: str, version: str, diagnostics: str = ""):
        super().__init__(f"Installation of {name}=={version} failed")
        self.name = name
        self.version = version
        self.diagnostics = diagnostics

    def __str__(self) -> str:
        base = super().__str__()
        if self.diagnostics:
            return f"{base}:\n{self.diagnostics.strip()}"
        return base
