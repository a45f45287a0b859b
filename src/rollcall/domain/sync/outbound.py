"""Best-effort mirroring of committed local changes to the remote store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rollcall.config.event import DEFAULT_OUTBOUND_BATCH_SIZE
from rollcall.domain.errors import RemoteStoreError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from rollcall.domain.model import Guest, SystemSettings
    from rollcall.domain.ports import RemoteDocumentStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ConnectivityStatus:
    """Passive indicator for the desk UI; never blocks an operation."""

    connected: bool = False
    last_error: str | None = None
    using_local_data_protection: bool = False

    def mark_connected(self) -> None:
        if not self.connected:
            log.info("Remote store reachable")
        self.connected = True
        self.last_error = None

    def mark_degraded(self, error: str) -> None:
        if self.connected:
            log.info("Remote store unreachable, continuing locally")
        self.connected = False
        self.last_error = error


def chunked[T](items: Sequence[T], size: int) -> list[Sequence[T]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


class OutboundMirror:
    """Push changes after they are committed locally.

    Failures are logged and recorded on :attr:`status`; nothing is retried and
    nothing is raised, so local state is never rolled back.
    """

    def __init__(
        self,
        store: RemoteDocumentStore | None,
        *,
        status: ConnectivityStatus | None = None,
        batch_size: int = DEFAULT_OUTBOUND_BATCH_SIZE,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.store = store
        self.status = status or ConnectivityStatus()
        self.batch_size = batch_size

    @property
    def enabled(self) -> bool:
        return self.store is not None

    def push_guests(self, guests: Sequence[Guest]) -> bool:
        store = self.store
        if store is None or not guests:
            return store is not None
        for chunk in chunked(guests, self.batch_size):
            if not self._attempt("guest write", lambda chunk=chunk: store.put_guests(chunk)):
                return False
        return True

    def delete_guests(self, guest_ids: Sequence[str]) -> bool:
        store = self.store
        if store is None or not guest_ids:
            return store is not None
        for chunk in chunked(guest_ids, self.batch_size):
            if not self._attempt("guest delete", lambda chunk=chunk: store.delete_guests(chunk)):
                return False
        return True

    def clear_guests(self) -> bool:
        store = self.store
        if store is None:
            return False
        return self._attempt("guest clear", store.clear_guests)

    def patch_settings(self, changes: Mapping[str, object]) -> bool:
        store = self.store
        if store is None or not changes:
            return store is not None
        return self._attempt("settings patch", lambda: store.patch_settings(changes))

    def put_settings(self, settings: SystemSettings) -> bool:
        store = self.store
        if store is None:
            return False
        return self._attempt("settings write", lambda: store.put_settings(settings))

    def _attempt(self, action: str, operation: Callable[[], None]) -> bool:
        try:
            operation()
        except RemoteStoreError as exc:
            log.error("Remote %s failed: %s", action, exc)
            self.status.mark_degraded(str(exc))
            return False
        self.status.mark_connected()
        return True
