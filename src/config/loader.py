"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. Settings defaults   -- the field defaults in src/config/settings.py
  2. config/config.yaml  -- static defaults checked into the repo
  3. .env file           -- local developer overrides (not committed)
  4. Environment vars    -- set at deploy time

Only settings that were actually supplied by ``.env``, the environment or
the constructor override the YAML; untouched field defaults sit beneath it.
"""

from pathlib import Path
from typing import Any

import yaml

from src.config.settings import Settings

# Settings field -> (section, key) in the resolved config dict.
_SETTINGS_KEYS: dict[str, tuple[str, str]] = {
    "app_host": ("app", "host"),
    "app_port": ("app", "port"),
    "app_env": ("app", "env"),
    "skiddle_api_base": ("events", "skiddle_api_base"),
    "upstream_timeout": ("events", "timeout"),
    "search_default_page_size": ("search", "default_page_size"),
    "search_max_page_size": ("search", "max_page_size"),
    "genre_inflation_factor": ("search", "genre_inflation_factor"),
    "location_radius_miles": ("search", "location_radius_miles"),
    "default_order": ("search", "default_order"),
    "event_cache_ttl": ("cache", "ttl"),
    "event_cache_max_size": ("cache", "max_size"),
    "log_level": ("logging", "level"),
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings instance to merge; a fresh one is built when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    config = _sectioned(settings, _SETTINGS_KEYS)
    _deep_merge(config, yaml_config)
    _deep_merge(config, _sectioned(settings, settings.model_fields_set & _SETTINGS_KEYS.keys()))
    return config


def _sectioned(settings: Settings, fields: Any) -> dict[str, dict[str, Any]]:
    """Nest the named Settings fields under their config sections."""
    nested: dict[str, dict[str, Any]] = {}
    for field in fields:
        section, key = _SETTINGS_KEYS[field]
        nested.setdefault(section, {})[key] = getattr(settings, field)
    return nested


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
