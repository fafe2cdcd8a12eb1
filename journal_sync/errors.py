"""Exception hierarchy for journal sync."""

from __future__ import annotations


class JournalSyncError(Exception):
    """Base class for all journal sync errors."""


class StoreError(JournalSyncError):
    """A persistence operation failed (connectivity, constraint, I/O)."""


class MissingRecordIdError(JournalSyncError, ValueError):
    """A record was submitted for writing without an identifier."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Record at position {position} has no id")
