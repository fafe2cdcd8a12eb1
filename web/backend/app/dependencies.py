"""Shared FastAPI dependencies: settings and the record store singleton."""

from __future__ import annotations

from typing import Optional

from journal_sync.config import Settings, load_settings
from journal_sync.store.record_store import RecordStore

_settings: Optional[Settings] = None
_store: Optional[RecordStore] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_store() -> RecordStore:
    """Return the singleton RecordStore instance."""
    global _store
    if _store is None:
        _store = RecordStore(get_settings().db_path)
    return _store
