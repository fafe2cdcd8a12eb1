"""Pydantic models for API request/response serialization.

Field names follow the client wire format (camelCase) through aliases.
Request models are permissive: individual entries are passed through as
plain mappings and normalized by ``journal_sync.models.Record.from_dict``.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EntryResponse(BaseModel):
    """Mirrors journal_sync.models.Record in its client-facing shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    app_id: str = Field("", alias="appId")
    content: str = ""
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    date: Optional[Union[int, float, str]] = None
    date_iso: Optional[Union[int, float, str]] = Field(None, alias="dateISO")
    timestamp: Optional[Union[int, float, str]] = None


class SaveEntriesResponse(BaseModel):
    success: bool = True
    count: int = 0


class SyncRequest(BaseModel):
    """Body of ``POST /api/sync``."""

    model_config = ConfigDict(populate_by_name=True)

    app_id: Optional[str] = Field(None, alias="appId")
    local_entries: list[dict[str, Any]] = Field(default_factory=list, alias="localEntries")


class SyncResponse(BaseModel):
    """Mirrors journal_sync.models.SyncResult."""

    downloaded: list[EntryResponse] = Field(default_factory=list)
    uploaded: int = 0
