"""Runtime configuration for the mapping resolver.

Tunables live on ``Constants``. They can be overridden, in increasing order of
precedence, by a YAML (or JSON) config file, environment variables and CLI
arguments. Example YAML::

    yarn:
      meta_url: https://meta.fabricmc.net/v1
      maven_url: https://maven.fabricmc.net/
      data_dir: data/yarn
      cache_ttl: 14400
      refresh_interval: 14400
      request_timeout: 30
      user_agent: my-bot/1.0
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .constants import Constants

logger = logging.getLogger(__name__)

# config key -> (Constants attribute, converter)
_SETTINGS = {
    "meta_url": ("META_URL", str),
    "maven_url": ("MAVEN_URL", str),
    "data_dir": ("DATA_DIR", str),
    "cache_ttl": ("MAPPING_CACHE_TTL_SEC", int),
    "refresh_interval": ("REFRESH_INTERVAL_SEC", int),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "user_agent": ("USER_AGENT", str),
}

_ENV_SETTINGS = {
    Constants.ENV_DATA_DIR: "data_dir",
    Constants.ENV_META_URL: "meta_url",
    Constants.ENV_MAVEN_URL: "maven_url",
}


def _read_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the ``yarn`` section of a config file.

    Looks at ``path``, then ``YARNMAPPINGS_CONFIG``, then the default
    locations. An explicitly named file that cannot be read is an error;
    missing default files are skipped.
    """
    explicit = path or os.environ.get(Constants.ENV_CONFIG)
    if explicit:
        try:
            data = _read_file(explicit)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ValueError(f"Could not load config file {explicit}: {exc}") from exc
        logger.debug("Loaded config from %s", explicit)
        return data.get("yarn", data)

    for candidate in Constants.DEFAULT_CONFIG_PATHS:
        candidate = os.path.expanduser(candidate)
        if not os.path.isfile(candidate):
            continue
        try:
            data = _read_file(candidate)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", candidate, exc)
            continue
        logger.debug("Loaded config from %s", candidate)
        return data.get("yarn", data)
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Copy recognised keys of ``cfg`` onto ``Constants``."""
    for key, value in cfg.items():
        setting = _SETTINGS.get(key)
        if setting is None:
            logger.warning("Unknown config key ignored: %s", key)
            continue
        attr, convert = setting
        try:
            setattr(Constants, attr, convert(value))
        except (TypeError, ValueError):
            logger.warning("Invalid value for %s: %r", key, value)


def apply_env_overrides() -> None:
    """Apply overrides from YARNMAPPINGS_* environment variables."""
    cfg = {}
    for env_name, key in _ENV_SETTINGS.items():
        value = os.environ.get(env_name)
        if value and value.strip():
            cfg[key] = value.strip()
    apply_config(cfg)


def apply_cli_overrides(args) -> None:
    """Apply CLI overrides, which take precedence over file and environment."""
    if getattr(args, "DATA_DIR", None):
        Constants.DATA_DIR = args.DATA_DIR
    if getattr(args, "META_URL", None):
        Constants.META_URL = args.META_URL
    if getattr(args, "MAVEN_URL", None):
        Constants.MAVEN_URL = args.MAVEN_URL


def configure(args=None) -> None:
    """Load file config, then environment, then CLI overrides."""
    apply_config(load_config(getattr(args, "CONFIG", None)))
    apply_env_overrides()
    if args is not None:
        apply_cli_overrides(args)
