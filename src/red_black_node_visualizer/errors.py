"""Exception types raised by red-black-node-visualizer."""

from __future__ import annotations

__all__ = ["TreeParseError"]


class TreeParseError(ValueError):
    """Raised when a tree string is not well-formed.

    Only malformed JSON or records of the wrong shape raise this error.
    Structural anomalies described by a well-formed tree string (divergent
    pointers, sentinels, validation messages) are regular data.
    """
