"""FlipFocus: a focus timer that keeps a history of completed sessions."""

__version__ = "0.1.0"
