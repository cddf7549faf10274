"""Configuration file loading and runtime overrides for modtag.

Settings come from an optional YAML or JSON file; CLI flags applied later in
the entrypoint take precedence over it.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config key -> (Constants attribute, converter)
_OVERRIDES = {
    "github_api_base": ("GITHUB_API_BASE", str),
    "gitlab_api_base": ("GITLAB_API_BASE", str),
    "default_registry_host": ("DEFAULT_REGISTRY_HOST", str),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "http_retry_max": ("HTTP_RETRY_MAX", int),
    "http_cache_ttl": ("HTTP_CACHE_TTL_SEC", int),
}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or is malformed."""


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a configuration mapping from a YAML, YML or JSON file.

    A top-level ``modtag`` section is used when present.

    Raises:
        ConfigError: if the file is missing, unparsable or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to load config {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")
    section = data.get("modtag", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'modtag' section of {config_path} must be a mapping")
    return section


def apply_config_overrides(config: Dict[str, Any]) -> None:
    """Apply recognised config keys onto Constants; unknown keys are logged and ignored.

    Raises:
        ConfigError: if a value has the wrong type.
    """
    for key, value in config.items():
        target = _OVERRIDES.get(key)
        if target is None:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        attr, convert = target
        try:
            setattr(Constants, attr, convert(value))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid value for '{key}': {value!r}") from exc
