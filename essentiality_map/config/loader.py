from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from essentiality_map.config.model import GlobalConfig
from essentiality_map.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

_STRING_KEYS = ("ui_title", "subtitle", "api_url", "default_gene_id")


def global_config_from_dict(raw: Dict[str, Any]) -> GlobalConfig:
    """
    Build a GlobalConfig from parsed JSON. Missing keys keep their defaults.

    :raises ConfigError: if a value has the wrong type
    """
    if not isinstance(raw, dict):
        raise ConfigError("global.json must contain a JSON object")

    defaults = GlobalConfig()
    values: Dict[str, Any] = {}

    for key in _STRING_KEYS:
        value = raw.get(key, getattr(defaults, key))
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string, got {value!r}")
        values[key] = value

    timeout = raw.get("request_timeout", defaults.request_timeout)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"'request_timeout' must be a positive number, got {timeout!r}")
    values["request_timeout"] = float(timeout)

    return GlobalConfig(**values)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or has bad values.
    """
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = Path(root) / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    return global_config_from_dict(raw)
