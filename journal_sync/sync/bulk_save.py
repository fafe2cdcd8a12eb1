"""Unconditional create-or-update of client records."""

from __future__ import annotations

from typing import Any, Iterable, Union

from loguru import logger

from journal_sync.errors import MissingRecordIdError
from journal_sync.models import DEFAULT_APP_ID, Record
from journal_sync.store.record_store import RecordStore

RecordLike = Union[Record, dict]


def coerce_records(payload: Any, default_app_id: str = DEFAULT_APP_ID) -> list[Record]:
    """Turn a client payload into records.

    ``payload`` may be a single record (mapping or ``Record``) or a list of
    them. Entries that are neither are skipped. Each record must carry an id;
    the first one that does not raises ``MissingRecordIdError`` before
    anything is written.
    """
    items = payload if isinstance(payload, (list, tuple)) else [payload]
    records: list[Record] = []
    for position, item in enumerate(items):
        if isinstance(item, Record):
            record = item
        elif isinstance(item, dict):
            record = Record.from_dict(item, default_app_id=default_app_id)
        else:
            logger.warning("Skipping non-object entry at position {}", position)
            continue
        if not record.id:
            raise MissingRecordIdError(position)
        records.append(record)
    return records


class BulkSaver:
    """Writes records with full-overwrite semantics.

    Used when a client explicitly commits edits, as opposed to the presence
    sync done by :class:`~journal_sync.sync.reconciler.Reconciler`.
    """

    def __init__(self, store: RecordStore, default_app_id: str = DEFAULT_APP_ID) -> None:
        self.store = store
        self.default_app_id = default_app_id

    def save_entries(self, records: Union[RecordLike, Iterable[RecordLike]]) -> int:
        """Replace-write every record and return how many were submitted.

        The count includes entries that are not objects and were therefore
        skipped. A store failure stops the batch at that record and
        propagates as ``StoreError``; records written before it stay written.
        """
        if isinstance(records, (Record, dict, str)) or not isinstance(records, Iterable):
            items = [records]
        else:
            items = list(records)
        batch = coerce_records(items, default_app_id=self.default_app_id)
        for record in batch:
            if not record.app_id:
                record = record.in_partition(self.default_app_id)
            self.store.upsert_replace(record)
        logger.info("Saved {} of {} submitted record(s)", len(batch), len(items))
        return len(items)
