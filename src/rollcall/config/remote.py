"""Remote document store configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var, optional_env_var
from .errors import ConfigurationError
from .event import DEFAULT_OUTBOUND_BATCH_SIZE

DEFAULT_REMOTE_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class RemoteStoreConfig:
    """Where the shared guest documents live."""

    base_url: str
    api_token: str | None = None
    timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT_SECONDS
    batch_size: int = DEFAULT_OUTBOUND_BATCH_SIZE

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Remote store URL must be http(s): {self.base_url!r}")
        if self.timeout_seconds <= 0:
            raise ConfigurationError("Remote store timeout must be positive")
        if self.batch_size <= 0:
            raise ConfigurationError("Remote store batch size must be positive")

    @property
    def headers(self) -> dict[str, str]:
        if self.api_token is None:
            return {}
        return {"Authorization": f"Bearer {self.api_token}"}


def get_remote_config() -> RemoteStoreConfig | None:
    """Load the remote store settings, or ``None`` to run in local-only mode."""

    base_url = optional_env_var("ROLLCALL_REMOTE_URL")
    if base_url is None:
        return None
    return RemoteStoreConfig(
        base_url=base_url.rstrip("/"),
        api_token=optional_env_var("ROLLCALL_REMOTE_TOKEN"),
        timeout_seconds=float_env_var("ROLLCALL_REMOTE_TIMEOUT", DEFAULT_REMOTE_TIMEOUT_SECONDS),
    )
