"""modgen - versioned package installs and environment modules.

    Resolves the latest release of a package on a PyPI-compatible index,
    installs it into ``root/name/version`` and prints the search-path
    variables needed to use it.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
from dataclasses import asdict

from constants import ExitCodes, Constants, OutputFormats
from common.errors import (
    IndexUnavailable,
    InstallationFailed,
    InvalidVersion,
    ModgenError,
    PackageNotFound,
)
from common.logging_utils import configure_logging
from args import parse_args
from cli_config import ConfigError, apply_config
from install.descriptor import describe, render
from install.installer import PipInstaller
from install.materializer import ModuleMaterializer, is_path_safe_token, record_for
from versioning.models import ResolutionResult
from versioning.resolvers import PyPIVersionResolver

logger = logging.getLogger(__name__)

_ERROR_EXIT_CODES = (
    (PackageNotFound, ExitCodes.PACKAGE_NOT_FOUND),
    (IndexUnavailable, ExitCodes.CONNECTION_ERROR),
    (InvalidVersion, ExitCodes.INVALID_INPUT),
    (InstallationFailed, ExitCodes.INSTALL_ERROR),
)


def exit_code_for(exc: Exception) -> ExitCodes:
    """Map a failure to the exit code reported by the CLI."""
    for exc_type, code in _ERROR_EXIT_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, (ConfigError, OSError)):
        return ExitCodes.FILE_ERROR
    return ExitCodes.INVALID_INPUT


def _setup_logging(args) -> None:
    configure_logging(getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def write_modulefile(text: str, directory: str, name: str, version: str) -> str:
    """Write a modulefile to ``directory/name/version`` and return its path."""
    module_dir = os.path.join(directory, name)
    os.makedirs(module_dir, exist_ok=True)
    path = os.path.join(module_dir, version)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text + "\n")
    logger.info("Wrote modulefile %s", path)
    return path


def run_resolve(args) -> int:
    """Handle ``modgen resolve``."""
    resolver = PyPIVersionResolver(Constants.REGISTRY_URL_PYPI)
    if not args.JSON:
        print(resolver.resolve(args.NAME))
        return ExitCodes.SUCCESS.value

    try:
        result = ResolutionResult(args.NAME, resolver.index_name, resolver.resolve(args.NAME), None)
        code = ExitCodes.SUCCESS
    except ModgenError as exc:
        result = ResolutionResult(args.NAME, resolver.index_name, None, str(exc))
        code = exit_code_for(exc)
    print(json.dumps(asdict(result), indent=2))
    return code.value


def run_install(args) -> int:
    """Handle ``modgen install``."""
    version = args.VERSION
    if not version:
        version = PyPIVersionResolver(Constants.REGISTRY_URL_PYPI).resolve(args.NAME)

    index_url = None
    if Constants.REGISTRY_URL_PYPI != Constants.DEFAULT_REGISTRY_URL_PYPI:
        index_url = simple_index_url(Constants.REGISTRY_URL_PYPI)
    installer = PipInstaller(
        python=Constants.PYTHON_EXECUTABLE or None,
        index_url=index_url,
        extra_args=Constants.PIP_ARGS,
    )
    materializer = ModuleMaterializer(installer)
    record = materializer.materialize(args.NAME, version, Constants.INSTALL_ROOT)
    descriptor = materializer.describe(record)

    if args.MODULEFILE_DIR:
        write_modulefile(
            render(descriptor, OutputFormats.MODULEFILE.value, record),
            args.MODULEFILE_DIR,
            record.name,
            record.version,
        )
    print(render(descriptor, args.OUTPUT_FORMAT, record))
    return ExitCodes.SUCCESS.value


def run_describe(args) -> int:
    """Handle ``modgen describe``."""
    if not is_path_safe_token(args.VERSION):
        raise InvalidVersion(args.VERSION)
    if not is_path_safe_token(args.NAME):
        raise ValueError(f"Invalid package name: {args.NAME!r}")
    record = record_for(args.NAME, args.VERSION, Constants.INSTALL_ROOT)
    if not record.exists:
        logger.error("%s %s is not installed under %s", args.NAME, args.VERSION, Constants.INSTALL_ROOT)
        return ExitCodes.FILE_ERROR.value
    print(render(describe(record), args.OUTPUT_FORMAT, record))
    return ExitCodes.SUCCESS.value


def simple_index_url(json_api_url: str) -> str:
    """Translate a ``.../pypi/`` JSON API base into the ``.../simple/`` index pip expects."""
    base = json_api_url.rstrip("/")
    if base.endswith("/pypi"):
        base = base[: -len("/pypi")]
    return base + "/simple/"


_ACTIONS = {
    "resolve": run_resolve,
    "install": run_install,
    "describe": run_describe,
}


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        apply_config(args)
        return _ACTIONS[args.action](args)
    except (ModgenError, ConfigError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return exit_code_for(exc).value


if __name__ == "__main__":
    sys.exit(main())
