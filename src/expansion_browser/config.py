"""Configuration persistence: load and save."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from expansion_browser.models import (
    CATEGORY_FILTERS,
    CONFIG_APP_NAME,
    DEFAULT_CATALOG_NAME,
    DEFAULT_PAGE_SIZE,
    FILTER_ALL,
    MAX_PAGE_SIZE,
    SessionState,
    UserConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field                     Rule                         Handler
#   ────────────────────────  ───────────────────────────  ─────────────────────
#   page_size                 1 ≤ x ≤ MAX_PAGE_SIZE        coerce_page_size
#   session.category_filter   in CATEGORY_FILTERS          _parse_session_state
#   session.current_page      x ≥ 1                        _parse_session_state
#   catalog_name              non-empty string             _dict_to_config
#   scalar fields             type-checked via _safe_get() _dict_to_config
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/expansion-browser/config.json
    - macOS: ~/Library/Application Support/expansion-browser/config.json
    - Windows: %APPDATA%/expansion-browser/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type) or (
        expected_type is int and isinstance(value, bool)
    ):
        return default
    return value


def coerce_page_size(value: Any) -> int:
    """Validate and clamp the configured page size."""
    if not isinstance(value, int) or isinstance(value, bool):
        return DEFAULT_PAGE_SIZE
    return max(1, min(value, MAX_PAGE_SIZE))


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "page_size": coerce_page_size(config.page_size),
        "export_dir": config.export_dir,
        "catalog_name": config.catalog_name,
        "session": {
            "category_filter": config.session.category_filter,
            "search_text": config.session.search_text,
            "current_page": config.session.current_page,
        },
    }


def _parse_session_state(data: dict[str, Any]) -> SessionState:
    """Parse the session state section from config data."""
    session_data = data.get("session", {})
    if not isinstance(session_data, dict):
        session_data = {}

    category_filter = _safe_get(session_data, "category_filter", FILTER_ALL, str)
    if category_filter not in CATEGORY_FILTERS:
        logger.warning("Invalid session category_filter %r, using 'all'", category_filter)
        category_filter = FILTER_ALL

    return SessionState(
        category_filter=category_filter,
        search_text=_safe_get(session_data, "search_text", "", str),
        current_page=max(1, _safe_get(session_data, "current_page", 1, int)),
    )


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    return UserConfig(
        session=_parse_session_state(data),
        page_size=coerce_page_size(data.get("page_size", DEFAULT_PAGE_SIZE)),
        export_dir=_safe_get(data, "export_dir", "", str),
        catalog_name=_safe_get(data, "catalog_name", DEFAULT_CATALOG_NAME, str)
        or DEFAULT_CATALOG_NAME,
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            logger.warning("Config file is not a JSON object, using defaults")
            return UserConfig()
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Uses write-to-tempfile + os.replace() to prevent partial writes
    on crash/interrupt from corrupting the config file.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(config)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "coerce_page_size",
    "get_config_path",
    "load_config",
    "save_config",
]
