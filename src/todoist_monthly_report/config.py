from __future__ import annotations
import os
from typing import Any, Dict

import yaml

from .api import TODOIST_DEFAULT_BASE
from .errors import ConfigError
from .report import DEFAULT_LIMIT, OUTPUT_FORMATS


DEFAULT_CONFIG_PATH = ".todoist-report.yaml"
TOKEN_ENV = "TODOIST_API_TOKEN"

DEFAULTS: Dict[str, Any] = {
    "base_url": TODOIST_DEFAULT_BASE,
    "timeout": 30.0,
    "limit": DEFAULT_LIMIT,
    "tz": "UTC",
    "match_year": True,
    "format": "text",
}


def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict:
    """
    Read the `report:` section of a YAML file, filling defaults for missing
    keys. A missing file just yields the defaults.
    """
    if not os.path.exists(path):
        return dict(DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")
    r = data.get("report") or {}
    if not isinstance(r, dict):
        raise ConfigError(f"config {path}: 'report' must be a mapping")
    try:
        cfg = {
            "base_url": str(r.get("base_url", DEFAULTS["base_url"])),
            "timeout": float(r.get("timeout", DEFAULTS["timeout"])),
            "limit": int(r.get("limit", DEFAULTS["limit"])),
            "tz": str(r.get("tz", DEFAULTS["tz"])),
            "match_year": r.get("match_year", DEFAULTS["match_year"]),
            "format": str(r.get("format", DEFAULTS["format"])),
        }
    except (TypeError, ValueError) as e:
        raise ConfigError(f"config {path}: {e}") from e
    if cfg["limit"] <= 0:
        raise ConfigError(f"config {path}: limit must be positive")
    if cfg["timeout"] <= 0:
        raise ConfigError(f"config {path}: timeout must be positive")
    if not isinstance(cfg["match_year"], bool):
        raise ConfigError(f"config {path}: match_year must be true or false")
    if cfg["format"] not in OUTPUT_FORMATS:
        raise ConfigError(f"config {path}: format must be one of {', '.join(OUTPUT_FORMATS)}")
    return cfg
