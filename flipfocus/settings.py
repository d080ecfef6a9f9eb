"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FlipFocus/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields

from .paths import APP_SUPPORT_DIR
from .timer.presets import DEFAULT_PRESETS, PresetCatalog


logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

STORAGE_BACKENDS = ("sqlite", "json")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_presets() -> list[list]:
    return [[p.label, p.minutes] for p in DEFAULT_PRESETS]


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    presets: list[list] = field(default_factory=_default_presets)

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── history ───────────────────────────────────────────────────────
    storage_backend: str = "sqlite"        # sqlite | json
    open_calendar_on_complete: bool = True

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    def catalog(self) -> PresetCatalog:
        """Build the preset catalog.  Raises ``ValueError`` if invalid."""
        return PresetCatalog.from_pairs(self.presets)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**_checked(filtered))
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Could not read %s (%s); using defaults", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


def _valid_value(name: str, value) -> bool:
    # bool is a subclass of int, so it is ruled out for numeric fields.
    if name in ("sound_enabled", "open_calendar_on_complete"):
        return isinstance(value, bool)
    if name == "sound_volume":
        return isinstance(value, int) and not isinstance(value, bool)
    if name == "storage_backend":
        return value in STORAGE_BACKENDS
    if name == "log_level":
        return isinstance(value, str) and value.upper() in LOG_LEVELS
    if name == "presets":
        return isinstance(value, list)
    return True


def _checked(data: dict) -> dict:
    """Drop values of the wrong type so their defaults apply instead."""
    checked = {}
    for name, value in data.items():
        if not _valid_value(name, value):
            logger.warning("Ignoring invalid setting %s=%r", name, value)
            continue
        checked[name] = value
    if "sound_volume" in checked:
        checked["sound_volume"] = max(0, min(checked["sound_volume"], 100))
    return checked
