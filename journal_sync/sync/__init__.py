"""Synchronization services: reconciliation and unconditional bulk save."""

from journal_sync.sync.bulk_save import BulkSaver, coerce_records
from journal_sync.sync.reconciler import Reconciler

__all__ = ["BulkSaver", "Reconciler", "coerce_records"]
