"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- JSON config file (config.json)
- Type coercion and validation
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allow-list entry that selects every channel in channels.json
ALL_CHANNELS = "*"


class AppSettings(BaseSettings):
    """Application settings with validation.

    Settings are loaded from a JSON config file (config.json).
    """

    log_source: str = "."
    channels: list[str] = [ALL_CHANNELS]
    emoji_json: str = "emoji.json"
    # Day files live under the channel ID (converted logs) or name (raw exports)
    channel_dir: Literal["id", "name"] = "id"

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    @field_validator("channels", mode="before")
    @classmethod
    def ensure_string_list(cls, v: Any) -> list[str]:
        """Ensure channel names are strings."""
        if isinstance(v, list):
            return [str(c) for c in v]
        return v

    @classmethod
    def from_json(cls, path: str | Path = "config.json") -> "AppSettings":
        """Load settings from a JSON config file.

        Args:
            path: Path to the JSON config file

        Returns:
            AppSettings instance with validated configuration
        """
        config_path = Path(path)
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls(**data)
        return cls()


@lru_cache
def get_settings(config_path: str = "config.json") -> AppSettings:
    """Get cached application settings.

    Args:
        config_path: Path to JSON config file (default: config.json)

    Returns:
        Cached AppSettings instance
    """
    return AppSettings.from_json(config_path)


def load_config(path: str | Path = "config.json") -> AppSettings:
    """Load configuration from file, bypassing the settings cache."""
    get_settings.cache_clear()
    return AppSettings.from_json(path)
