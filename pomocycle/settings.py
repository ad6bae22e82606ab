"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/PomoCycle/settings.json

Only preferences live here.  The running session is never written out.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import IntervalKind, TimerConfig


logger = logging.getLogger(__name__)

# Shared with audio/sounds.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "PomoCycle"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = 25 * 60           # seconds
    short_break_duration: int = 5 * 60
    long_break_duration: int = 15 * 60

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    always_on_top: bool = False

    def timer_config(self) -> TimerConfig:
        """Durations as an immutable config.  Raises ValueError if invalid."""
        return TimerConfig({
            IntervalKind.WORK: self.work_duration,
            IntervalKind.SHORT_BREAK: self.short_break_duration,
            IntervalKind.LONG_BREAK: self.long_break_duration,
        })


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
        settings.timer_config()
    except (OSError, ValueError, TypeError, AttributeError) as error:
        logger.warning("ignoring unusable settings file %s: %s", SETTINGS_PATH, error)
        return Settings()
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
