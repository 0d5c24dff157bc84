"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    PACKAGE_NOT_FOUND = 3
    INVALID_INPUT = 4
    INSTALL_ERROR = 5


class OutputFormats(Enum):
    """Environment descriptor output formats.

    Args:
        Enum (string): Output formats supported by the program.
    """

    SH = "sh"
    CSH = "csh"
    JSON = "json"
    MODULEFILE = "modulefile"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DEFAULT_REGISTRY_URL_PYPI = "https://pypi.org/pypi/"
    REGISTRY_URL_PYPI = DEFAULT_REGISTRY_URL_PYPI
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    INSTALL_ROOT = "/opt/modgen"
    PYTHON_EXECUTABLE = ""  # empty means the running interpreter
    PIP_ARGS = []
    SUPPORTED_FORMATS = [f.value for f in OutputFormats]

    ENV_LOG_LEVEL = "MODGEN_LOG_LEVEL"
    ENV_CONFIG = "MODGEN_CONFIG"
    ENV_ROOT = "MODGEN_ROOT"
    ENV_INDEX_URL = "MODGEN_INDEX_URL"

    # Keys accepted in the YAML config file, mapped to Constants attributes
    CONFIG_KEYS = {
        "index_url": "REGISTRY_URL_PYPI",
        "root": "INSTALL_ROOT",
        "request_timeout": "REQUEST_TIMEOUT",
        "python": "PYTHON_EXECUTABLE",
        "pip_args": "PIP_ARGS",
    }
