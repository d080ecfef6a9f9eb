"""Completion cue: three short beeps, synthesized with numpy.

The beep is an 800 Hz sine lasting 0.3 s whose gain falls exponentially
from 0.3 to 0.01.  It is rendered once to a WAV file in the cache directory
and played through a small pool of ``QSoundEffect`` voices so overlapping
cue sequences do not cut each other off.

``CueScheduler.request()`` schedules the pulses at 0, 500 and 1000 ms and
returns immediately.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable, Protocol

import numpy as np

from PyQt6.QtCore import QObject, QTimer, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..paths import APP_SUPPORT_DIR


logger = logging.getLogger(__name__)

# ── constants ────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
BEEP_FILENAME = "completion_beep.wav"

SAMPLE_RATE = 44100
BEEP_FREQUENCY = 800.0      # Hz
BEEP_DURATION = 0.3         # seconds
BEEP_START_GAIN = 0.3
BEEP_END_GAIN = 0.01

CUE_OFFSETS_MS: tuple[int, ...] = (0, 500, 1000)
DEFAULT_VOICES = 6


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _exponential_decay(length: int, start: float, end: float) -> np.ndarray:
    """Gain curve falling geometrically from *start* to *end*."""
    return np.geomspace(start, end, num=length)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_beep() -> bytes:
    tone = _sine(BEEP_FREQUENCY, BEEP_DURATION)
    env = _exponential_decay(len(tone), BEEP_START_GAIN, BEEP_END_GAIN)
    # Trailing silence so QSoundEffect doesn't clip the tail
    padded = np.concatenate([tone * env, np.zeros(int(SAMPLE_RATE * 0.03))])
    return _to_wav_bytes(padded)


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class TonePlayer(QObject):
    """Owns the audio handle: a round-robin pool of sound effects.

    Usage::

        player = TonePlayer(parent=self)
        player.set_volume(70)
        player.play()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        voices: int = DEFAULT_VOICES,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: list[QSoundEffect] = []
        self._next_voice = 0

        path = self._ensure_wav_file()
        for _ in range(max(1, voices)):
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects.append(effect)

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates every voice."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects:
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self) -> None:
        """Play one beep on the next free voice.  No-op if disabled."""
        if not self._enabled or not self._effects:
            return
        effect = self._effects[self._next_voice]
        self._next_voice = (self._next_voice + 1) % len(self._effects)
        effect.play()

    def close(self) -> None:
        """Stop and release every voice."""
        for effect in self._effects:
            effect.stop()
            effect.deleteLater()
        self._effects.clear()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def voices(self) -> int:
        return len(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_file(self) -> Path:
        """Generate the beep into the cache directory if missing."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        path = self._sounds_dir / BEEP_FILENAME
        if not path.exists():
            path.write_bytes(generate_beep())
        return path


# ═══════════════════════════════════════════════════════════════════════════
#  SCHEDULER
# ═══════════════════════════════════════════════════════════════════════════


class Player(Protocol):
    def play(self) -> None: ...


def _qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(delay_ms, callback)


class CueScheduler:
    """Fires the fixed pulse pattern on request, never blocking.

    Pulses are scheduled independently, so a second request before the
    first finishes overlaps rather than queues.  Engine state has no say
    over pulses already scheduled; only ``close()`` silences them.
    """

    def __init__(
        self,
        player: Player | None,
        *,
        schedule: Callable[[int, Callable[[], None]], None] = _qt_single_shot,
        offsets_ms: tuple[int, ...] = CUE_OFFSETS_MS,
    ) -> None:
        self._player = player
        self._schedule = schedule
        self._offsets = offsets_ms

    @property
    def offsets_ms(self) -> tuple[int, ...]:
        return self._offsets

    @property
    def closed(self) -> bool:
        return self._player is None

    def request(self) -> None:
        if self._player is None:
            return
        logger.debug("Cue requested (%d pulses)", len(self._offsets))
        for offset in self._offsets:
            self._schedule(offset, self._pulse)

    def close(self) -> None:
        """Release the player.  Pending pulses become no-ops."""
        player, self._player = self._player, None
        close = getattr(player, "close", None)
        if close is not None:
            close()

    def _pulse(self) -> None:
        if self._player is not None:
            self._player.play()
