"""Tests for settings defaults and JSON persistence."""

from __future__ import annotations

import json

import pytest

from flipfocus.settings import Settings, load_settings, save_settings
from flipfocus.timer.presets import DEFAULT_PRESETS


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr("flipfocus.settings.SETTINGS_PATH", path)
    return path


class TestSettingsDefaults:
    def test_presets_match_catalog(self):
        catalog = Settings().catalog()
        assert list(catalog) == list(DEFAULT_PRESETS)

    def test_sound_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70

    def test_storage_default(self):
        assert Settings().storage_backend == "sqlite"

    def test_calendar_default(self):
        assert Settings().open_calendar_on_complete is True

    def test_presets_not_shared_between_instances(self):
        a, b = Settings(), Settings()
        a.presets.append(["Extra", 5])
        assert len(b.presets) == len(DEFAULT_PRESETS)


class TestSettingsPersistence:
    def test_round_trip(self, settings_path):
        """save → load produces identical settings."""
        original = Settings(presets=[["Sprint", 15]], sound_volume=42)
        save_settings(original)
        loaded = load_settings()
        assert loaded.presets == [["Sprint", 15]]
        assert loaded.sound_volume == 42
        assert loaded.catalog().default.label == "Sprint"

    def test_missing_file_returns_defaults(self, settings_path):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, settings_path):
        settings_path.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings() == Settings()

    def test_non_object_json_returns_defaults(self, settings_path):
        settings_path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_extra_keys_ignored(self, settings_path):
        data = {"sound_volume": 10, "unknown_future_key": True}
        settings_path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.sound_volume == 10
        assert not hasattr(s, "unknown_future_key")

    def test_unknown_backend_falls_back(self, settings_path):
        settings_path.write_text(json.dumps({"storage_backend": "cloud"}), encoding="utf-8")
        assert load_settings().storage_backend == "sqlite"

    def test_invalid_presets_surface_on_catalog(self):
        with pytest.raises(ValueError):
            Settings(presets=[]).catalog()


# ═══════════════════════════════════════════════════════════════════════
#  Hand-edited files with wrong value types
# ═══════════════════════════════════════════════════════════════════════

class TestSettingsValidation:
    def _load(self, settings_path, data):
        settings_path.write_text(json.dumps(data), encoding="utf-8")
        return load_settings()

    def test_non_numeric_volume_uses_default(self, settings_path):
        s = self._load(settings_path, {"sound_volume": "loud", "sound_enabled": False})
        assert s.sound_volume == 70
        assert s.sound_enabled is False

    def test_bool_volume_uses_default(self, settings_path):
        assert self._load(settings_path, {"sound_volume": True}).sound_volume == 70

    def test_volume_is_clamped(self, settings_path):
        assert self._load(settings_path, {"sound_volume": 250}).sound_volume == 100
        assert self._load(settings_path, {"sound_volume": -5}).sound_volume == 0

    def test_non_string_log_level_uses_default(self, settings_path):
        assert self._load(settings_path, {"log_level": 10}).log_level == "INFO"

    def test_unknown_log_level_uses_default(self, settings_path):
        assert self._load(settings_path, {"log_level": "chatty"}).log_level == "INFO"

    def test_lowercase_log_level_kept(self, settings_path):
        assert self._load(settings_path, {"log_level": "debug"}).log_level == "debug"

    def test_non_bool_flags_use_defaults(self, settings_path):
        s = self._load(settings_path, {
            "sound_enabled": "no",
            "open_calendar_on_complete": 0,
        })
        assert s.sound_enabled is True
        assert s.open_calendar_on_complete is True

    def test_non_list_presets_use_default(self, settings_path):
        s = self._load(settings_path, {"presets": "Focus Time"})
        assert list(s.catalog()) == list(DEFAULT_PRESETS)

    def test_bad_values_do_not_break_startup(self, qapp, settings_path, tmp_path):
        from flipfocus.__main__ import setup_logging
        from flipfocus.audio.cues import TonePlayer

        s = self._load(settings_path, {"sound_volume": "loud", "log_level": ["x"]})
        player = TonePlayer(sounds_dir=tmp_path)
        player.set_volume(s.sound_volume)
        player.set_enabled(s.sound_enabled)
        assert setup_logging(s.log_level).name == "flipfocus"
