"""Where the local guest mirror is stored."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DATABASE_FILENAME = "rollcall.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def data_dir() -> Path:
    """``ROLLCALL_DATA_DIR``, else ``$XDG_DATA_HOME/rollcall`` (``%LOCALAPPDATA%`` on Windows)."""

    explicit = os.getenv("ROLLCALL_DATA_DIR")
    if explicit:
        return Path(explicit).expanduser().resolve()
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    else:
        root = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return (Path(root) / "rollcall").expanduser().resolve()


def get_database_config() -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file in :func:`data_dir`, created on demand."""

    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    directory = data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{directory / DATABASE_FILENAME}")
