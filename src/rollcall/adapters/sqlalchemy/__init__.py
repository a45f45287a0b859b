"""SQLAlchemy adapter package for the local mirror."""

from __future__ import annotations

from .local_mirror import SqlAlchemyLocalMirror
from .mappings import (
    GUESTS_KEY,
    SETTINGS_KEY,
    StoredBlob,
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import SqlAlchemyBlobRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "GUESTS_KEY",
    "SETTINGS_KEY",
    "SqlAlchemyBlobRepository",
    "SqlAlchemyLocalMirror",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "StoredBlob",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "startup",
]
