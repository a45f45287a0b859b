"""Remote document store adapters."""

from __future__ import annotations

from .client import GUESTS_PATH, SETTINGS_PATH, HttpDocumentStore
from .memory import InMemoryDocumentStore

__all__ = [
    "GUESTS_PATH",
    "SETTINGS_PATH",
    "HttpDocumentStore",
    "InMemoryDocumentStore",
]
