"""Exception types raised by FlipFocus components."""

from __future__ import annotations


class FlipFocusError(Exception):
    """Base class for all FlipFocus errors."""


class UnknownPresetError(FlipFocusError, KeyError):
    """A preset (or preset label) that is not part of the catalog."""

    def __init__(self, preset: object) -> None:
        super().__init__(preset)
        self.preset = preset

    def __str__(self) -> str:
        return f"unknown preset: {self.preset!r}"


class PersistenceUnavailableError(FlipFocusError):
    """The session repository could not load or save.

    Never fatal: the history keeps working in memory.
    """
