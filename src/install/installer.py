"""External installers invoked by the materializer."""
from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import List, Optional

from common.errors import InstallationFailed
from common.logging_utils import extra_context, safe_url, Timer

logger = logging.getLogger(__name__)


class Installer(ABC):
    """Install one exact package version into a target directory."""

    @abstractmethod
    def install(self, name: str, version: str, target: str) -> None:
        """Install ``name==version`` so that ``target`` becomes its prefix.

        Raises:
            InstallationFailed: If the installer reports failure.
        """


class PipInstaller(Installer):
    """Run ``pip install --prefix`` in a subprocess."""

    def __init__(
        self,
        python: Optional[str] = None,
        index_url: Optional[str] = None,
        extra_args: Optional[List[str]] = None,
    ):
        self.python = python or sys.executable
        self.index_url = index_url
        self.extra_args = list(extra_args or [])

    def build_command(self, name: str, version: str, target: str) -> List[str]:
        """Return the argv used to install ``name==version`` into ``target``."""
        cmd = [
            self.python, "-m", "pip", "install",
            "--prefix", target,
            "--no-warn-script-location",
            "--disable-pip-version-check",
        ]
        if self.index_url:
            cmd += ["--index-url", self.index_url]
        cmd += self.extra_args
        cmd.append(f"{name}=={version}")
        return cmd

    def install(self, name: str, version: str, target: str) -> None:
        cmd = self.build_command(name, version, target)
        logger.debug(
            "Running installer",
            extra=extra_context(
                event="install_start",
                component="installer",
                package=name,
                version=version,
                index=safe_url(self.index_url) if self.index_url else None,
            )
        )
        with Timer() as t:
            try:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    check=False,
                )
            except OSError as exc:
                raise InstallationFailed(name, version, f"could not run {cmd[0]}: {exc}") from exc

        if proc.returncode != 0:
            logger.error(
                "pip exited with status %s for %s==%s",
                proc.returncode,
                name,
                version,
                extra=extra_context(
                    event="install_end",
                    component="installer",
                    outcome="failure",
                    duration_ms=t.duration_ms(),
                )
            )
            diagnostics = "\n".join(s for s in (proc.stdout, proc.stderr) if s)
            raise InstallationFailed(name, version, diagnostics)

        logger.debug(
            "Installer finished",
            extra=extra_context(
                event="install_end",
                component="installer",
                outcome="success",
                duration_ms=t.duration_ms(),
            )
        )
