"""Audio cues."""

from .cues import CUE_OFFSETS_MS, CueScheduler, TonePlayer, generate_beep

__all__ = ["CUE_OFFSETS_MS", "CueScheduler", "TonePlayer", "generate_beep"]
