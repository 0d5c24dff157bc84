"""Configuration loading and CLI overrides for runtime tunables.

Values are applied onto ``Constants`` in increasing precedence: YAML config
file, environment variables, then command-line flags.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The configuration file is missing or malformed."""


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the YAML configuration file.

    Args:
        config_path: Path to a YAML file, or None to use MODGEN_CONFIG.

    Returns:
        Mapping of recognized keys to values; empty when no file is configured.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    path = config_path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = {}
    for key, value in data.items():
        if key not in Constants.CONFIG_KEYS:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        config[key] = value
    logger.debug("Loaded config from %s: %s", path, sorted(config))
    return config


def _coerce(key: str, value: Any) -> Any:
    if key == "request_timeout":
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"request_timeout must be an integer, got {value!r}") from exc
    if key == "pip_args":
        if isinstance(value, str):
            return value.split()
        if not isinstance(value, list):
            raise ConfigError(f"pip_args must be a list or string, got {value!r}")
        return [str(v) for v in value]
    return str(value)


def apply_config(args) -> None:
    """Apply config file, environment and CLI overrides onto ``Constants``."""
    for key, value in load_config(getattr(args, "CONFIG", None)).items():
        setattr(Constants, Constants.CONFIG_KEYS[key], _coerce(key, value))

    env_root = os.environ.get(Constants.ENV_ROOT)
    if env_root:
        Constants.INSTALL_ROOT = env_root
    env_index = os.environ.get(Constants.ENV_INDEX_URL)
    if env_index:
        Constants.REGISTRY_URL_PYPI = env_index

    if getattr(args, "INDEX_URL", None):
        Constants.REGISTRY_URL_PYPI = args.INDEX_URL
    if getattr(args, "ROOT", None):
        Constants.INSTALL_ROOT = args.ROOT
