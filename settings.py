from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "LOG_LEVEL"
_DISPLAY_PLACES_ENV = "CHARGE_DISPLAY_PLACES"


@dataclass(frozen=True)
class Settings:
    log_level: str
    display_places: Optional[int]


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_display_places(default: Optional[int]) -> Optional[int]:
    value = os.getenv(_DISPLAY_PLACES_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        display_places=_read_display_places(None),
    )
