"""Exceptions raised by the engine.

Missing or malformed data never raises; it degrades to the most restrictive
answer. Only caller bugs and unreadable input files end up here.
"""

from __future__ import annotations


class OrgChartError(Exception):
    """Base class for all engine errors."""


class InvalidStageError(OrgChartError, ValueError):
    """The policy engine was asked about a stage outside 1-3."""

    def __init__(self, stage: object) -> None:
        super().__init__(f"Unknown survey stage: {stage!r} (expected 1, 2, 3 or None)")
        self.stage = stage


class RecordFileError(OrgChartError):
    """A record or config file could not be read or has the wrong shape."""
