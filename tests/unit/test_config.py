"""Tests for taggedtext.config -- Settings and sub-models.

Every test constructs Settings(_env_file=None, ...) to avoid reading real .env files.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from taggedtext.categories import KEYWORD_CATEGORIES, TagCategory
from taggedtext.config import (
    EditConfig,
    LegacyConfig,
    LogConfig,
    Settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TAGGEDTEXT_EDIT__STRICT_RANGES",
        "TAGGEDTEXT_LOG__LEVEL",
        "TAGGEDTEXT_LOG__LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Defaults when nothing is configured."""

    def test_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.edit.strict_ranges is False
        assert s.legacy.keep_categories == KEYWORD_CATEGORIES
        assert s.log.level == "INFO"
        assert s.log.log_dir is None


class TestEnvironment:
    """Values read from TAGGEDTEXT_* environment variables."""

    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGGEDTEXT_EDIT__STRICT_RANGES", "true")
        monkeypatch.setenv("TAGGEDTEXT_LOG__LEVEL", "debug")
        monkeypatch.setenv("TAGGEDTEXT_LOG__LOG_DIR", "/tmp/taggedtext-logs")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.edit.strict_ranges is True
        assert s.log.level == "DEBUG"
        assert s.log.log_dir == Path("/tmp/taggedtext-logs")

    def test_invalid_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGGEDTEXT_LOG__LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


class TestSubModels:
    """Direct construction of the sub-models."""

    def test_explicit_values(self) -> None:
        s = Settings(
            _env_file=None,  # type: ignore[call-arg]
            edit=EditConfig(strict_ranges=True),
            legacy=LegacyConfig(keep_categories=frozenset({TagCategory.BOLD})),
            log=LogConfig(level="warning"),
        )
        assert s.edit.strict_ranges is True
        assert s.legacy.keep_categories == frozenset({TagCategory.BOLD})
        assert s.log.level == "WARNING"

    def test_categories_from_values(self) -> None:
        cfg = LegacyConfig.model_validate({"keep_categories": ["kw", "sym"]})
        assert cfg.keep_categories == frozenset(
            {TagCategory.KEYWORD, TagCategory.SYMBOL}
        )


class TestGetSettings:
    """Cached accessor."""

    def test_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
