"""Runtime settings and logging setup.

Values come from environment variables first, then from
``~/.config/assistkit/config.toml``, then from the defaults below.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("~/.config/assistkit/config.toml")

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_FORM_URL = (
    "https://docs.google.com/forms/d/e/1FAIpQLSdZ05WVF7M0316CS5tPsDQZRC1YEEuWggMAq3jDj6RqvS9wEw/viewform"
)

_settings: Settings | None = None


class Settings(BaseModel):
    anthropic_api_key: str = ""
    claude_model: str = DEFAULT_MODEL
    vision_model: str = DEFAULT_MODEL
    # Seconds allowed for one generation call before it is reported as failed.
    generation_timeout: float = Field(default=60.0, gt=0)
    form_url: str = DEFAULT_FORM_URL
    form_entries_path: str | None = None
    log_level: str = "INFO"


# Environment variable -> (settings field, config.toml section, config.toml key)
_ENV_KEYS: dict[str, tuple[str, str, str]] = {
    "ANTHROPIC_API_KEY": ("anthropic_api_key", "api_keys", "anthropic"),
    "ASSISTKIT_CLAUDE_MODEL": ("claude_model", "models", "text"),
    "ASSISTKIT_VISION_MODEL": ("vision_model", "models", "vision"),
    "ASSISTKIT_GENERATION_TIMEOUT": ("generation_timeout", "reply", "timeout"),
    "ASSISTKIT_FORM_URL": ("form_url", "forms", "url"),
    "ASSISTKIT_FORM_ENTRIES": ("form_entries_path", "forms", "entries"),
    "ASSISTKIT_LOG_LEVEL": ("log_level", "logging", "level"),
}


def _load_config_file(path: Path) -> dict[str, Any]:
    path = path.expanduser()
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}


def load_settings(config_path: Path | None = None) -> Settings:
    """Build settings from the environment and the config file."""
    file_config = _load_config_file(config_path or CONFIG_PATH)
    values: dict[str, Any] = {}
    for env_key, (field, section, key) in _ENV_KEYS.items():
        value = os.environ.get(env_key, "")
        if not value:
            value = file_config.get(section, {}).get(key, "")
        if value == "":
            continue
        try:
            Settings.model_validate({field: value})
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {env_key} value {value!r}: {e.errors()[0]['msg']}")
            continue
        values[field] = value
    return Settings(**values)


def get_settings() -> Settings:
    """Get or load the global settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None


def configure_logging(level: str | int | None = None) -> None:
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
        level = resolved
    root = logging.getLogger()
    if not root.hasHandlers():
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
    else:
        root.setLevel(level)
