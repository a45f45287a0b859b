"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .event import (
    DEFAULT_CHECK_IN_ROUND,
    DEFAULT_EVENT_NAME,
    DEFAULT_LOTTERY_ROUND,
    DEFAULT_OUTBOUND_BATCH_SIZE,
    DEFAULT_TOTAL_ROUNDS,
)
from .logging import configure_logging
from .remote import RemoteStoreConfig, get_remote_config
from .storage import DatabaseConfig, data_dir, get_database_config

__all__ = [
    "DEFAULT_CHECK_IN_ROUND",
    "DEFAULT_EVENT_NAME",
    "DEFAULT_LOTTERY_ROUND",
    "DEFAULT_OUTBOUND_BATCH_SIZE",
    "DEFAULT_TOTAL_ROUNDS",
    "ConfigurationError",
    "DatabaseConfig",
    "RemoteStoreConfig",
    "configure_logging",
    "data_dir",
    "get_database_config",
    "get_remote_config",
    "optional_env_var",
]
