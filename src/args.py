"""Argument parsing functionality for modgen."""

import argparse

from constants import Constants, OutputFormats


def _add_common(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: MODGEN_LOG_LEVEL or INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--index-url",
                        dest="INDEX_URL",
                        help="Base URL of the PyPI JSON API (default: %s)" % Constants.REGISTRY_URL_PYPI,
                        action="store",
                        type=str)


def _add_root(parser):
    parser.add_argument("-r", "--root",
                        dest="ROOT",
                        help="Installation root (default: %s)" % Constants.INSTALL_ROOT,
                        action="store",
                        type=str)


def _add_format(parser):
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Environment descriptor output format",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS,
                        default=OutputFormats.SH.value)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="modgen",
        description=(
            "modgen - install Python packages into versioned prefixes "
            "and generate environment modules for them"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    resolve = subparsers.add_parser("resolve", help="Print the latest published version of a package")
    _add_common(resolve)
    resolve.add_argument("NAME", help="Package name")
    resolve.add_argument("--json",
                         dest="JSON",
                         help="Print the resolution result as JSON",
                         action="store_true")

    install = subparsers.add_parser("install", help="Install a package version and print its environment")
    _add_common(install)
    _add_root(install)
    _add_format(install)
    install.add_argument("NAME", help="Package name")
    install.add_argument("-V", "--version",
                         dest="VERSION",
                         help="Install this exact version instead of the latest",
                         action="store",
                         type=str)
    install.add_argument("-m", "--modulefile-dir",
                         dest="MODULEFILE_DIR",
                         help="Also write a modulefile to DIR/NAME/VERSION",
                         action="store",
                         type=str)

    describe = subparsers.add_parser("describe", help="Print the environment of an existing installation")
    _add_common(describe)
    _add_root(describe)
    _add_format(describe)
    describe.add_argument("NAME", help="Package name")
    describe.add_argument("VERSION", help="Installed version")

    return parser.parse_args(argv)
