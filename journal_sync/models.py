"""Data models for synchronized journal records."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

DEFAULT_APP_ID = "daily"

# SQLite INTEGER is a signed 64-bit value.
_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1

Scalar = Union[int, float, str]
Timestamp = Scalar


def opaque_scalar(value: Any) -> Optional[Scalar]:
    """Normalize an opaque client field to something the store can hold.

    ``None``, strings, floats and in-range integers pass through untouched.
    Integers outside the SQLite range become their decimal string, anything
    else (objects, arrays) becomes JSON text.
    """
    if value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        if _SQLITE_INT_MIN <= value <= _SQLITE_INT_MAX:
            return value
        return str(value)
    return json.dumps(value, default=str, ensure_ascii=False)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str, ensure_ascii=False)


@dataclass
class Record:
    """A single journal entry, the unit of synchronization.

    ``id`` is generated by the client and never changes. ``app_id`` is the
    partition the record lives in. ``date`` and ``date_iso`` are opaque to the
    server and returned exactly as given.
    """

    id: str
    app_id: str = DEFAULT_APP_ID
    content: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    date: Optional[Scalar] = None
    date_iso: Optional[Scalar] = None
    timestamp: Optional[Timestamp] = None

    @classmethod
    def from_dict(cls, d: dict[str, Any], default_app_id: str = DEFAULT_APP_ID) -> Record:
        """Build a record from a loosely-typed client payload.

        Missing or wrongly-typed optional fields fall back to their defaults
        instead of raising. A legacy ``uuid`` key is accepted when ``id`` is
        absent. The id is left empty when neither is present; callers that
        write decide what to do about that.
        """
        record_id = d.get("id")
        if record_id is None:
            record_id = d.get("uuid")
        app_id = d.get("appId")
        tags = d.get("tags")
        return cls(
            id="" if record_id is None else _text(record_id),
            app_id=app_id if isinstance(app_id, str) and app_id else default_app_id,
            content=_text(d.get("content")),
            category=_text(d.get("category")),
            tags=[t for t in tags if isinstance(t, str)] if isinstance(tags, (list, tuple)) else [],
            date=opaque_scalar(d.get("date")),
            date_iso=opaque_scalar(d.get("dateISO")),
            timestamp=opaque_scalar(d.get("timestamp")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the client-facing shape (camelCase keys)."""
        return {
            "id": self.id,
            "appId": self.app_id,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
            "date": self.date,
            "dateISO": self.date_iso,
            "timestamp": self.timestamp,
        }

    def in_partition(self, app_id: str) -> Record:
        """Return a copy of this record assigned to ``app_id``."""
        return replace(self, app_id=app_id, tags=list(self.tags))


@dataclass
class SyncResult:
    """Outcome of one reconciliation pass."""

    to_download: list[Record] = field(default_factory=list)
    uploaded_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "downloaded": [r.to_dict() for r in self.to_download],
            "uploaded": self.uploaded_count,
        }
