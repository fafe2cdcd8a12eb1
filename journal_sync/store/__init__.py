"""Persistence layer: the partitioned record table and its column codecs."""

from journal_sync.store.record_store import RecordStore
from journal_sync.store.tags import decode_tags, encode_tags

__all__ = ["RecordStore", "decode_tags", "encode_tags"]
