from __future__ import annotations

import pytest

from settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_apply_without_environment(monkeypatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("CHARGE_DISPLAY_PLACES", raising=False)

    settings = get_settings()

    assert settings.log_level == "INFO"
    assert settings.display_places is None


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("CHARGE_DISPLAY_PLACES", "2")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.display_places == 2


@pytest.mark.parametrize("raw", ["", "  ", "two", "-1"])
def test_invalid_display_places_fall_back_to_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("CHARGE_DISPLAY_PLACES", raw)

    assert get_settings().display_places is None


def test_settings_are_cached(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    first = get_settings()
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert get_settings() is first
    assert get_settings().log_level == "WARNING"
