"""Bidirectional, non-destructive sync of one partition.

Given the records a client holds locally, the reconciler returns the stored
records the client is missing and inserts the client's records the store is
missing. Records are matched by id only; content is never compared.
Uploads use insert-if-absent, so a stale client copy can never overwrite a
record the store already holds.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from journal_sync.models import DEFAULT_APP_ID, SyncResult
from journal_sync.store.record_store import RecordStore
from journal_sync.sync.bulk_save import RecordLike, coerce_records


class Reconciler:
    """Computes and applies the set difference between a client and the store."""

    def __init__(self, store: RecordStore, default_app_id: str = DEFAULT_APP_ID) -> None:
        self.store = store
        self.default_app_id = default_app_id

    def reconcile(self, app_id: str, local_records: Iterable[RecordLike]) -> SyncResult:
        """Synchronize ``local_records`` with partition ``app_id``.

        Returns the stored records whose id is not among the local ids, and
        the number of local records submitted (duplicates and ids that were
        already stored still count, as do skipped non-object entries).
        """
        app_id = app_id or self.default_app_id
        submitted = list(local_records)
        local = coerce_records(submitted, default_app_id=app_id)

        cloud = self.store.list_by_partition(app_id)
        local_ids = {r.id for r in local}
        to_download = [r for r in cloud if r.id not in local_ids]

        inserted = 0
        for record in local:
            # Always write into the partition being synced, whatever the
            # record itself claims.
            if self.store.upsert_if_absent(record.in_partition(app_id)):
                inserted += 1

        logger.info(
            "Reconciled {}: {} to download, {} submitted, {} inserted",
            app_id,
            len(to_download),
            len(submitted),
            inserted,
        )
        return SyncResult(to_download=to_download, uploaded_count=len(submitted))
