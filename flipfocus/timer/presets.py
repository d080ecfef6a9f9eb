"""Preset durations and the immutable preset catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..errors import UnknownPresetError


@dataclass(frozen=True)
class PresetDuration:
    label: str
    minutes: int

    @property
    def seconds(self) -> int:
        return self.minutes * 60


DEFAULT_PRESETS: tuple[PresetDuration, ...] = (
    PresetDuration("Focus Time", 25),
    PresetDuration("Deep Work", 45),
    PresetDuration("Extended Focus", 55),
    PresetDuration("Power Session", 90),
)


class PresetCatalog:
    """Ordered, read-only collection of presets.

    Built once at startup.  The first preset is the engine's initial
    selection.
    """

    def __init__(self, presets: Iterable[PresetDuration] = DEFAULT_PRESETS) -> None:
        items = tuple(presets)
        if not items:
            raise ValueError("preset catalog needs at least one preset")
        seen: set[str] = set()
        for preset in items:
            if not preset.label.strip():
                raise ValueError("preset label must not be blank")
            if preset.label in seen:
                raise ValueError(f"duplicate preset label: {preset.label!r}")
            if isinstance(preset.minutes, bool) or not isinstance(preset.minutes, int) \
                    or preset.minutes <= 0:
                raise ValueError(
                    f"preset {preset.label!r} needs a positive whole number of minutes"
                )
            seen.add(preset.label)
        self._presets = items

    @classmethod
    def from_pairs(cls, pairs: Iterable[Iterable]) -> PresetCatalog:
        """Build a catalog from ``[label, minutes]`` pairs (settings format)."""
        return cls(PresetDuration(str(label), int(minutes)) for label, minutes in pairs)

    @property
    def default(self) -> PresetDuration:
        return self._presets[0]

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self._presets]

    def resolve(self, preset: PresetDuration | str) -> PresetDuration:
        """Return the catalog entry for *preset* (an entry or its label).

        Raises ``UnknownPresetError`` for anything outside the catalog.
        """
        if isinstance(preset, PresetDuration):
            if preset in self._presets:
                return preset
        elif isinstance(preset, str):
            for candidate in self._presets:
                if candidate.label == preset:
                    return candidate
        raise UnknownPresetError(preset)

    def __contains__(self, preset: object) -> bool:
        return preset in self._presets

    def __iter__(self) -> Iterator[PresetDuration]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)

    def __getitem__(self, index: int) -> PresetDuration:
        return self._presets[index]

    def __repr__(self) -> str:
        return f"<PresetCatalog {', '.join(self.labels)}>"
