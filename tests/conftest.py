"""Shared fixtures for the journal sync tests."""

import pytest

from journal_sync.store.record_store import RecordStore


@pytest.fixture
def store():
    """An in-memory record store, closed after the test."""
    s = RecordStore(":memory:")
    yield s
    s.close()
