"""Codec for the ``tags`` column.

Tags are an ordered list of strings on the record and a JSON array in the
database.
"""

from __future__ import annotations

import json
from typing import Any


def encode_tags(tags: Any) -> str:
    """Serialize a tag sequence.

    Non-string items are dropped and a non-sequence encodes as ``[]``.
    """
    if not isinstance(tags, (list, tuple)):
        return "[]"
    return json.dumps([t for t in tags if isinstance(t, str)], ensure_ascii=False)


def decode_tags(raw: Any) -> list[str]:
    """Deserialize a stored tag column, falling back to an empty list."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(data, list):
        return []
    return [t for t in data if isinstance(t, str)]
