"""Environment descriptors for installed prefixes.

A descriptor maps search-path variables to the directories that should be
prepended to them. Only directories that actually exist in the prefix are
listed. Applying a descriptor to a real environment is left to the caller;
``apply_descriptor`` and ``render`` are the adapters this project ships.
"""
from __future__ import annotations

import glob
import json
import os
import shlex
from typing import Dict, Mapping, Optional

from constants import OutputFormats
from .models import EnvironmentDescriptor, InstallationRecord

# An empty entry in these variables stands for the system default search path.
_KEEP_DEFAULT = ("MANPATH",)


def _site_packages(prefix: str) -> list:
    patterns = (
        os.path.join(prefix, "lib", "python*", "site-packages"),
        os.path.join(prefix, "lib64", "python*", "site-packages"),
    )
    found = []
    for pattern in patterns:
        found.extend(p for p in glob.glob(pattern) if os.path.isdir(p))
    return sorted(found)


def describe(record: InstallationRecord) -> EnvironmentDescriptor:
    """Return the path variables to prepend for ``record``.

    PATH points at ``bin``, PYTHONPATH at every ``site-packages`` directory
    and MANPATH at ``share/man``. A variable is omitted when its directory
    does not exist.
    """
    descriptor: EnvironmentDescriptor = {}

    bin_dir = os.path.join(record.root, "bin")
    if os.path.isdir(bin_dir):
        descriptor["PATH"] = bin_dir

    site_dirs = _site_packages(record.root)
    if site_dirs:
        descriptor["PYTHONPATH"] = os.pathsep.join(site_dirs)

    man_dir = os.path.join(record.root, "share", "man")
    if os.path.isdir(man_dir):
        descriptor["MANPATH"] = man_dir

    return descriptor


def apply_descriptor(
    descriptor: EnvironmentDescriptor, environ: Mapping[str, str]
) -> Dict[str, str]:
    """Return a copy of ``environ`` with each descriptor entry prepended.

    Existing values are kept after the new fragment, so the installed
    directories win on lookup. An unset MANPATH gets a trailing separator so
    the system manual pages stay reachable. ``environ`` itself is not modified.
    """
    result = dict(environ)
    for var, fragment in descriptor.items():
        current = result.get(var)
        if current:
            result[var] = f"{fragment}{os.pathsep}{current}"
        elif var in _KEEP_DEFAULT:
            result[var] = f"{fragment}{os.pathsep}"
        else:
            result[var] = fragment
    return result


def _render_sh(descriptor: EnvironmentDescriptor) -> str:
    lines = []
    for var, fragment in descriptor.items():
        if var in _KEEP_DEFAULT:
            lines.append(f'export {var}={shlex.quote(fragment)}":${{{var}}}"')
        else:
            lines.append(f'export {var}={shlex.quote(fragment)}"${{{var}:+:${var}}}"')
    return "\n".join(lines)


def _render_csh(descriptor: EnvironmentDescriptor) -> str:
    lines = []
    for var, fragment in descriptor.items():
        quoted = shlex.quote(fragment)
        fallback = f'{quoted}":"' if var in _KEEP_DEFAULT else quoted
        lines.append(
            f"if ($?{var}) then\n"
            f'    setenv {var} {quoted}":${{{var}}}"\n'
            f"else\n"
            f"    setenv {var} {fallback}\n"
            f"endif"
        )
    return "\n".join(lines)


def _render_modulefile(descriptor: EnvironmentDescriptor, record: InstallationRecord) -> str:
    lines = [
        "#%Module1.0",
        f'module-whatis "{record.name} {record.version}"',
        f"conflict {record.name}",
        "",
    ]
    for var, fragment in descriptor.items():
        for part in fragment.split(os.pathsep):
            lines.append(f"prepend-path {var} {{{part}}}")
    return "\n".join(lines)


def render(
    descriptor: EnvironmentDescriptor,
    fmt: str,
    record: Optional[InstallationRecord] = None,
) -> str:
    """Render ``descriptor`` for a shell, as JSON, or as an Environment Modules modulefile.

    Raises:
        ValueError: For an unknown format, or ``modulefile`` without a record.
    """
    if fmt == OutputFormats.SH.value:
        return _render_sh(descriptor)
    if fmt == OutputFormats.CSH.value:
        return _render_csh(descriptor)
    if fmt == OutputFormats.JSON.value:
        return json.dumps(descriptor, indent=2)
    if fmt == OutputFormats.MODULEFILE.value:
        if record is None:
            raise ValueError("modulefile output needs an installation record")
        return _render_modulefile(descriptor, record)
    raise ValueError(f"Unsupported output format: {fmt}")
