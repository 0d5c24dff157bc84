"""Install resolved package versions into ``root/name/version`` prefixes.

Each install is staged in a private directory next to its target and moved
into place with a single ``os.rename``, so a partially installed prefix is
never visible at the target path. A failed or crashed install removes its
staging directory, and the ``root/name`` directory if it created it and it
is still empty, before the error reaches the caller.
"""
from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from typing import Optional

from common.errors import InstallationFailed, InvalidVersion
from common.logging_utils import extra_context
from .descriptor import describe
from .installer import Installer, PipInstaller
from .models import EnvironmentDescriptor, InstallationRecord, MaterializeState

logger = logging.getLogger(__name__)

_SEPARATORS = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())
_STAGING_MODE = 0o755


def is_path_safe_token(value) -> bool:
    """True if ``value`` can be used as a single path component under a root."""
    if not isinstance(value, str) or not value.strip():
        return False
    if value in (".", "..") or "\0" in value:
        return False
    return not any(sep in value for sep in _SEPARATORS)


def _remove_if_empty(path: str) -> None:
    """Remove ``path`` if it is an empty directory; leave it alone otherwise."""
    try:
        os.rmdir(path)
    except OSError as exc:
        # Another install may have started using it meanwhile.
        if exc.errno not in (errno.ENOTEMPTY, errno.EEXIST, errno.ENOENT):
            raise


def record_for(name: str, version: str, root: str) -> InstallationRecord:
    """Derive the installation record for ``name``/``version`` under ``root``."""
    return InstallationRecord(
        name=name,
        version=version,
        root=os.path.join(os.path.abspath(root), name, version),
    )


class ModuleMaterializer:
    """Materialize package versions using an external installer."""

    def __init__(self, installer: Optional[Installer] = None):
        self.installer = installer or PipInstaller()

    def materialize(self, name: str, version: str, root: str) -> InstallationRecord:
        """Install ``name==version`` under ``root`` unless it is already there.

        Args:
            name: Package name; used as a path component.
            version: Exact version to install; used as a path component.
            root: Existing, writable installation root.

        Returns:
            InstallationRecord: The record for ``root/name/version``.

        Raises:
            InvalidVersion: If ``version`` is empty or contains a path separator.
            ValueError: If ``name`` is not a valid path component.
            NotADirectoryError: If ``root`` is not an existing directory.
            PermissionError: If ``root`` is not writable.
            InstallationFailed: If the installer fails or crashes.
        """
        if not is_path_safe_token(version):
            raise InvalidVersion(version)
        if not is_path_safe_token(name):
            raise ValueError(f"Invalid package name: {name!r}")
        if not os.path.isdir(root):
            raise NotADirectoryError(f"Installation root does not exist: {root}")
        if not os.access(root, os.W_OK | os.X_OK):
            raise PermissionError(f"Installation root is not writable: {root}")

        record = record_for(name, version, root)
        self._log_state(record, MaterializeState.REQUESTED)

        if record.exists:
            self._log_state(record, MaterializeState.ALREADY_INSTALLED)
            return record

        parent = os.path.dirname(record.root)
        created_parent = not os.path.isdir(parent)
        os.makedirs(parent, exist_ok=True)
        staging = tempfile.mkdtemp(prefix=f".{version}.", suffix=".staging", dir=parent)

        state = MaterializeState.FAILED
        try:
            os.chmod(staging, _STAGING_MODE)
            self._log_state(record, MaterializeState.INSTALLING)
            try:
                self.installer.install(name, version, staging)
            except InstallationFailed:
                raise
            except Exception as exc:  # pylint: disable=broad-exception-caught
                raise InstallationFailed(name, version, f"installer crashed: {exc!r}") from exc
            state = self._promote(staging, record)
        finally:
            if state is not MaterializeState.INSTALLED:
                shutil.rmtree(staging, ignore_errors=True)
            if state is MaterializeState.FAILED and created_parent:
                _remove_if_empty(parent)
            self._log_state(record, state)

        return record

    def describe(self, record: InstallationRecord) -> EnvironmentDescriptor:
        """Environment descriptor for ``record``; see ``install.descriptor.describe``."""
        return describe(record)

    @staticmethod
    def _promote(staging: str, record: InstallationRecord) -> MaterializeState:
        """Move the staging directory onto the target path."""
        try:
            os.rename(staging, record.root)
        except OSError as exc:
            # Another caller finished the same install first.
            if exc.errno in (errno.EEXIST, errno.ENOTEMPTY) and record.exists:
                return MaterializeState.ALREADY_INSTALLED
            raise
        return MaterializeState.INSTALLED

    @staticmethod
    def _log_state(record: InstallationRecord, state: MaterializeState) -> None:
        level = logging.ERROR if state is MaterializeState.FAILED else logging.INFO
        if state in (MaterializeState.REQUESTED, MaterializeState.INSTALLING):
            level = logging.DEBUG
        logger.log(
            level,
            "%s==%s: %s",
            record.name,
            record.version,
            state.value.replace("_", " "),
            extra=extra_context(
                event="materialize",
                component="materializer",
                state=state.value,
                target=record.root,
            )
        )
