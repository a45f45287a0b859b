"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import LocalMirror
from .remote import RemoteDocumentStore, SnapshotSource, Unsubscribe

__all__ = [
    "LocalMirror",
    "RemoteDocumentStore",
    "SnapshotSource",
    "Unsubscribe",
]
