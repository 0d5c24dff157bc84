"""PyPI registry client: list the published releases of a package."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from packaging.utils import canonicalize_name

from constants import Constants
from common.errors import IndexUnavailable
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

import registry.pypi as pypi_pkg

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json"}


def release_url(name: str, url: str = Constants.REGISTRY_URL_PYPI) -> str:
    """Return the JSON API URL for ``name`` using its PEP 503 normalized form."""
    base = url if url.endswith("/") else url + "/"
    return f"{base}{canonicalize_name(name)}/json"


def _is_yanked(files: List[Dict[str, Any]]) -> bool:
    """A release counts as yanked only when it has files and all of them are."""
    return bool(files) and all(f.get("yanked", False) for f in files)


def fetch_releases(name: str, url: str = Constants.REGISTRY_URL_PYPI) -> List[str]:
    """Fetch the release identifiers PyPI publishes for ``name``.

    Args:
        name (str): Package name as given by the user.
        url (str, optional): Base URL of the JSON API. Defaults to
            Constants.REGISTRY_URL_PYPI.

    Returns:
        list: Release identifiers in index order; empty when the package is
        unknown to the index.

    Raises:
        IndexUnavailable: On transport errors, unexpected status codes or an
        unusable response body.
    """
    fullurl = release_url(name, url)

    with Timer() as timer:
        status_code, data = pypi_pkg.get_json(fullurl, context="pypi", headers=HEADERS_JSON)

    if status_code == 404:
        logger.info(
            "Package not found on index",
            extra=extra_context(
                event="http_response",
                outcome="not_found",
                status_code=404,
                target=safe_url(fullurl),
                package_manager="pypi"
            )
        )
        return []
    if status_code != 200:
        logger.warning(
            "HTTP non-2xx from index",
            extra=extra_context(
                event="http_response",
                outcome="handled_non_2xx",
                status_code=status_code,
                duration_ms=timer.duration_ms(),
                target=safe_url(fullurl),
                package_manager="pypi"
            )
        )
        raise IndexUnavailable(safe_url(fullurl), f"unexpected status code {status_code}")

    if not isinstance(data, dict) or not isinstance(data.get("releases", {}), dict):
        raise IndexUnavailable(safe_url(fullurl), "response has no releases mapping")

    releases = data.get("releases", {})
    versions = [v for v, files in releases.items() if not _is_yanked(files or [])]

    if is_debug_enabled(logger):
        logger.debug(
            "Fetched release list",
            extra=extra_context(
                event="fetch_releases",
                component="client",
                outcome="success",
                count=len(versions),
                skipped_yanked=len(releases) - len(versions),
                duration_ms=timer.duration_ms(),
                package_manager="pypi"
            )
        )
    return versions
