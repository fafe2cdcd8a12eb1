"""Runtime settings for journal sync.

Values come from, in increasing priority: built-in defaults, an optional
YAML file, and ``JOURNAL_SYNC_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from journal_sync.models import DEFAULT_APP_ID

DEFAULT_DB_PATH = str(Path.home() / ".journal_sync" / "entries.db")

_ENV_VARS = {
    "db_path": "JOURNAL_SYNC_DB_PATH",
    "default_app_id": "JOURNAL_SYNC_DEFAULT_APP_ID",
    "log_level": "JOURNAL_SYNC_LOG_LEVEL",
}


@dataclass
class Settings:
    """Service configuration."""

    db_path: str = DEFAULT_DB_PATH
    default_app_id: str = DEFAULT_APP_ID
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML mapping. Unknown keys are ignored."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        known = {f.name for f in fields(cls)}
        return cls(**{k: str(v) for k, v in data.items() if k in known})

    def with_env(self) -> Settings:
        """Return a copy with any ``JOURNAL_SYNC_*`` variables applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name, var in _ENV_VARS.items():
            env_value = os.environ.get(var)
            if env_value:
                values[name] = env_value
        return Settings(**values)

    @classmethod
    def from_env(cls) -> Settings:
        return cls().with_env()


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """Build settings from an optional YAML file overlaid with the environment.

    When ``path`` is None, ``JOURNAL_SYNC_CONFIG`` is consulted for a file.
    """
    path = path or os.environ.get("JOURNAL_SYNC_CONFIG")
    base = Settings.from_yaml(path) if path else Settings()
    return base.with_env()
