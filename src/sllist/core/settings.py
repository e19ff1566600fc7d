"""Settings for the sllist engine.

``SllistSettings`` holds the few knobs the engine has: the print traversal's
terminator token, whether declined operations raise, and how structured
logging renders.  Values come from ``SLLIST_*`` environment variables or a
``.env`` file.

Examples:
    >>> from sllist.core.settings import get_settings
    >>> get_settings().terminator
    'NULL'

    $ SLLIST_RAISE_ON_NOOP=true SLLIST_LOG_LEVEL=debug python app.py

Tags:
    settings, configuration, pydantic, environment, sllist

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SllistSettings(BaseSettings):
    """Engine configuration.

    Fields
    ──────
    terminator    : Token written after the last element by ``print_list``
    raise_on_noop : Raise the error of a declined operation instead of returning it
    log_level     : Structlog filtering level
    log_json      : JSON renderer on/off (``None`` → JSON unless stderr is a tty)
    service_name  : ``service.name`` field on every log event
    """

    model_config = SettingsConfigDict(
        env_prefix="SLLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Traversal ────────────────────────────────────────────────
    terminator: str = Field(default="NULL", description="End-of-list marker for print traversals")

    # ── Error policy ─────────────────────────────────────────────
    raise_on_noop: bool = Field(default=False)

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_json: bool | None = Field(default=None)
    service_name: str = Field(default="sllist")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, SllistSettings] = {}


def get_settings(*, _force_reload: bool = False) -> SllistSettings:
    """Load, validate, and cache a :class:`SllistSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = SllistSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings so the next ``get_settings()`` re-reads the environment."""
    _settings_cache.clear()


__all__ = [
    "SllistSettings",
    "get_settings",
    "clear_settings_cache",
]
