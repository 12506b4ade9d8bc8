"""
CLI Context for managing application dependencies.

Holds CLI-level dependencies (settings, bucket store) that are initialized
once per command, avoiding global state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .settings import Settings, create_settings_from_env
from .storage.base import BucketStore
from .storage.object_store import bucket_store_for


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    The store is created lazily so commands that never touch storage
    (``formats``, ``validate --skip-bucket-check``) do not need SDKs or
    credentials.
    """
    settings: Settings
    _store: Optional[BucketStore] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        return cls(settings=create_settings_from_env())

    @property
    def store(self) -> BucketStore:
        """Get or create the bucket store for the configured backend."""
        if self._store is None:
            self._store = bucket_store_for(self.settings)
        return self._store
