"""Entries router -- list, bulk save, and reconcile journal records."""

from __future__ import annotations

from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Query

from journal_sync.config import Settings
from journal_sync.store.record_store import RecordStore
from journal_sync.sync.bulk_save import BulkSaver
from journal_sync.sync.reconciler import Reconciler
from web.backend.app.dependencies import get_settings, get_store
from web.backend.app.models.api import (
    EntryResponse,
    SaveEntriesResponse,
    SyncRequest,
    SyncResponse,
)

router = APIRouter(prefix="/api", tags=["entries"])


@router.get(
    "/entries",
    response_model=list[EntryResponse],
    summary="List the records of one application",
)
async def list_entries(
    app_id: Optional[str] = Query(None, alias="appId", description="Application id"),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Return every record of the partition, newest timestamp first."""
    records = store.list_by_partition(app_id or settings.default_app_id)
    return [r.to_dict() for r in records]


@router.post(
    "/entries",
    response_model=SaveEntriesResponse,
    summary="Create or overwrite records",
)
async def save_entries(
    body: Union[list[dict[str, Any]], dict[str, Any]] = Body(...),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Save one record or a list of records, replacing existing ids."""
    saver = BulkSaver(store, default_app_id=settings.default_app_id)
    count = saver.save_entries(body)
    return SaveEntriesResponse(success=True, count=count)


@router.post(
    "/sync",
    response_model=SyncResponse,
    summary="Reconcile a client's records with the store",
)
async def sync_entries(
    body: SyncRequest,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Upload the client's unknown records and return the ones it is missing."""
    reconciler = Reconciler(store, default_app_id=settings.default_app_id)
    result = reconciler.reconcile(body.app_id or settings.default_app_id, body.local_entries)
    return result.to_dict()
