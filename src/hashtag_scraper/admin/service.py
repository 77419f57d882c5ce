"""Admin service layer for configuration and stats management."""

from __future__ import annotations

import logging
import os
from typing import Any

from hashtag_scraper.metrics import get_metrics

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "http://localhost:5000/scrape_instagram"
DEFAULT_TOKEN_HEADER = "x-access-token"
DEFAULT_EXPORT_FILENAME = "scraped_posts.csv"
DEFAULT_EXPORT_DIR = "exports"

COLUMN_POLICIES = ("first", "union")

_DEFAULTS: dict[str, Any] = {
    "endpoint_url": DEFAULT_ENDPOINT_URL,
    "token_header": DEFAULT_TOKEN_HEADER,
    "request_timeout": 0,  # 0 = wait indefinitely
    "verify_ssl": True,
    "export_filename": DEFAULT_EXPORT_FILENAME,
    "export_dir": DEFAULT_EXPORT_DIR,
    "column_policy": "first",
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


def _load_config() -> dict[str, Any]:
    """Build the runtime configuration from environment variables."""
    column_policy = os.getenv("EXPORT_COLUMN_POLICY", _DEFAULTS["column_policy"]).lower()
    if column_policy not in COLUMN_POLICIES:
        logger.warning(f"Unknown EXPORT_COLUMN_POLICY={column_policy!r}, using 'first'")
        column_policy = "first"

    return {
        "endpoint_url": os.getenv("SCRAPER_ENDPOINT_URL", DEFAULT_ENDPOINT_URL),
        "token_header": os.getenv("SCRAPER_TOKEN_HEADER", DEFAULT_TOKEN_HEADER),
        "request_timeout": _env_float("SCRAPER_REQUEST_TIMEOUT", _DEFAULTS["request_timeout"]),
        "verify_ssl": _env_flag("SCRAPER_VERIFY_SSL", _DEFAULTS["verify_ssl"]),
        "export_filename": os.getenv("EXPORT_FILENAME", DEFAULT_EXPORT_FILENAME),
        "export_dir": os.getenv("EXPORT_DIR", DEFAULT_EXPORT_DIR),
        "column_policy": column_policy,
    }


# Runtime configuration overrides (not persisted)
_runtime_config: dict[str, Any] = _load_config()


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value with runtime override support.

    Args:
        key: Configuration key
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    return _runtime_config.get(key, default)


def get_stats() -> dict[str, Any]:
    """Get submission statistics and metrics.

    Returns:
        Dictionary with server stats and submission metrics
    """
    return get_metrics().to_dict()


def get_current_config() -> dict[str, Any]:
    """Get current runtime configuration.

    Returns:
        Dictionary with current config, defaults, and note
    """
    return {
        "config": _runtime_config,
        "defaults": dict(_DEFAULTS),
        "note": "Changes are not persisted and will reset on server restart",
    }


def update_config(config_updates: dict[str, Any]) -> dict[str, Any]:
    """Update runtime configuration.

    Unknown keys and values of the wrong type are ignored.

    Args:
        config_updates: Dictionary of config key-value pairs to update

    Returns:
        Dictionary with status, message, updated keys, and current config
    """
    updated = []
    for key, value in config_updates.items():
        if key == "endpoint_url" and isinstance(value, str) and value.startswith(("http://", "https://")):
            _runtime_config[key] = value
            updated.append(key)
        elif key in ("token_header", "export_filename", "export_dir") and isinstance(value, str) and value:
            _runtime_config[key] = value
            updated.append(key)
        elif key == "request_timeout" and isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0:
            _runtime_config[key] = value
            updated.append(key)
        elif key == "verify_ssl" and isinstance(value, bool):
            _runtime_config[key] = value
            updated.append(key)
        elif key == "column_policy" and value in COLUMN_POLICIES:
            _runtime_config[key] = value
            updated.append(key)

    if updated:
        logger.info(f"Runtime config updated: {', '.join(updated)}")

    return {
        "status": "success",
        "message": f"Updated {len(updated)} config value(s)",
        "updated": updated,
        "current_config": _runtime_config,
    }


def reset_config() -> None:
    """Restore the configuration loaded from the environment."""
    _runtime_config.clear()
    _runtime_config.update(_load_config())
