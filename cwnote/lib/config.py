"""
Settings loader for cwnote.

Settings come from an optional cwnote.env file. CLI flags override them;
see commands/annotate.py.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import envparse

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "cwnote.env"
DEFAULT_LABEL = "version"
DEFAULT_MAX_LIST_PAGES = 1000
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    """Run settings from cwnote.env"""
    region: str | None  # None means the SDK default chain decides
    label: str
    export_dir: Path
    export_enabled: bool
    max_list_pages: int  # Discovery gives up after this many pages
    log_level: str


def default_settings() -> Settings:
    return Settings(
        region=None,
        label=DEFAULT_LABEL,
        export_dir=Path("."),
        export_enabled=True,
        max_list_pages=DEFAULT_MAX_LIST_PAGES,
        log_level=DEFAULT_LOG_LEVEL,
    )


def _parse_positive_int(env: dict, key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {key} '{raw}', using default {default}")
        return default
    if value < 1:
        logger.warning(f"{key} must be at least 1, got {value}; using default {default}")
        return default
    return value


def _parse_log_level(env: dict) -> str:
    raw = env.get("CWNOTE_LOG_LEVEL", "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown CWNOTE_LOG_LEVEL '{raw}', using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return raw


def settings_from_env(env: dict) -> Settings:
    """Build Settings from parsed KEY=value pairs."""
    return Settings(
        region=env.get("CWNOTE_REGION") or None,
        label=env.get("CWNOTE_LABEL") or DEFAULT_LABEL,
        export_dir=Path(env.get("CWNOTE_EXPORT_DIR") or "."),
        export_enabled=env.get("CWNOTE_EXPORT", "true").lower() != "false",
        max_list_pages=_parse_positive_int(env, "CWNOTE_MAX_LIST_PAGES", DEFAULT_MAX_LIST_PAGES),
        log_level=_parse_log_level(env),
    )


def load_settings(path: Path | None = None, search_dir: Path | None = None) -> Settings:
    """Load settings from an explicit file, or from cwnote.env in search_dir.

    An explicit path must exist. The implicit cwnote.env is optional and
    defaults apply when it is missing.
    """
    if path is not None:
        return settings_from_env(envparse.load_env(path))

    candidate = (search_dir or Path.cwd()) / DEFAULT_SETTINGS_FILE
    if candidate.exists():
        logger.debug(f"Loading settings from {candidate}")
        return settings_from_env(envparse.load_env(candidate))

    return default_settings()
