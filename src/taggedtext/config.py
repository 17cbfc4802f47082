"""Runtime configuration using pydantic-settings.

The engine functions themselves are pure and take explicit arguments.
Settings only supply defaults to the command-line front end and the
logging set-up. Consumers call ``get_settings()`` to obtain a cached,
validated instance. Tests construct ``Settings(_env_file=None, ...)``
directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taggedtext.categories import KEYWORD_CATEGORIES, TagCategory

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class EditConfig(BaseModel):
    """Range edit behaviour."""

    # Reject start > end instead of swapping
    strict_ranges: bool = False


class LegacyConfig(BaseModel):
    """Legacy import behaviour."""

    keep_categories: frozenset[TagCategory] = KEYWORD_CATEGORIES


class LogConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            msg = f"log level must be one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return value


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use the ``TAGGEDTEXT_`` prefix and a
    double-underscore delimiter for nesting: ``TAGGEDTEXT_LOG__LEVEL``,
    ``TAGGEDTEXT_EDIT__STRICT_RANGES``, etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGGEDTEXT_",
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    edit: EditConfig = EditConfig()
    legacy: LegacyConfig = LegacyConfig()
    log: LogConfig = LogConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()
    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.debug("Settings loaded .env from: %s", env_file)
    return settings
