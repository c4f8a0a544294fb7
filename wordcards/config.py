"""
Configuration settings for wordcards.

Values come from the process environment, optionally seeded from a ``.env``
file next to the working directory or the package.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_WINDOW_SIZE = (800, 1000)

# Tabelle mit den Wortpaaren
WORDS_TABLE = "words"


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    log_level: str = DEFAULT_LOG_LEVEL
    window_size: tuple[int, int] = DEFAULT_WINDOW_SIZE

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def parse_window_size(value: Optional[str]) -> tuple[int, int]:
    """Parse ``WIDTHxHEIGHT``; anything else falls back to the default."""
    if not value:
        return DEFAULT_WINDOW_SIZE
    try:
        w, h = value.lower().split("x", 1)
        size = (int(w), int(h))
    except ValueError:
        return DEFAULT_WINDOW_SIZE
    if size[0] <= 0 or size[1] <= 0:
        return DEFAULT_WINDOW_SIZE
    return size


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``env`` or, by default, from ``.env`` + os.environ."""
    if env is None:
        load_dotenv()
        load_dotenv(BASE_DIR / ".env")
        env = os.environ
    return Settings(
        supabase_url=(env.get("SUPABASE_URL") or "").strip(),
        supabase_key=(env.get("SUPABASE_ANON_KEY") or "").strip(),
        log_level=(env.get("WORDCARDS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
        window_size=parse_window_size(env.get("WORDCARDS_WINDOW_SIZE")),
    )
