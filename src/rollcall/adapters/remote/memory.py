"""In-process remote store that pushes snapshots to its subscribers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rollcall.adapters.documents import (
    guest_to_payload,
    guests_from_payloads,
    settings_from_payload,
    settings_patch_payload,
    settings_to_payload,
)
from rollcall.domain.errors import ConnectivityLossError, SyncPropagationError
from rollcall.domain.model import SystemSettings

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from rollcall.domain.errors import RemoteStoreError
    from rollcall.domain.model import Guest
    from rollcall.domain.ports import Unsubscribe

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _Subscriber:
    on_guests: Callable[[list[Guest]], None]
    on_settings: Callable[[SystemSettings], None]
    on_error: Callable[[RemoteStoreError], None]


class InMemoryDocumentStore:
    """Keeps the wire documents in dicts, exactly as a shared store would.

    ``fail_writes`` and ``fail_reads`` simulate an unreachable store.
    """

    def __init__(self) -> None:
        self.guest_documents: dict[str, dict[str, Any]] = {}
        self.settings_document: dict[str, Any] | None = None
        self.fail_writes = False
        self.fail_reads = False
        self.write_batches: list[int] = []
        self._subscribers: list[_Subscriber] = []

    # Reads ------------------------------------------------------------------

    def fetch_guests(self) -> list[Guest]:
        self._check_reachable()
        return guests_from_payloads(list(self.guest_documents.values()))

    def fetch_settings(self) -> SystemSettings | None:
        self._check_reachable()
        if self.settings_document is None:
            return None
        return settings_from_payload(self.settings_document)

    # Writes -----------------------------------------------------------------

    def put_guests(self, guests: Sequence[Guest]) -> None:
        self._check_writable()
        for guest in guests:
            self.guest_documents[guest.id] = guest_to_payload(guest)
        self.write_batches.append(len(guests))
        self._publish()

    def delete_guests(self, guest_ids: Sequence[str]) -> None:
        self._check_writable()
        for guest_id in guest_ids:
            self.guest_documents.pop(guest_id, None)
        self._publish()

    def clear_guests(self) -> None:
        self._check_writable()
        self.guest_documents.clear()
        self._publish()

    def patch_settings(self, changes: Mapping[str, object]) -> None:
        self._check_writable()
        base = self.settings_document or settings_to_payload(SystemSettings())
        self.settings_document = {**base, **settings_patch_payload(changes)}
        self._publish()

    def put_settings(self, settings: SystemSettings) -> None:
        self._check_writable()
        self.settings_document = settings_to_payload(settings)
        self._publish()

    # Snapshots --------------------------------------------------------------

    def subscribe(
        self,
        *,
        on_guests: Callable[[list[Guest]], None],
        on_settings: Callable[[SystemSettings], None],
        on_error: Callable[[RemoteStoreError], None],
    ) -> Unsubscribe:
        subscriber = _Subscriber(on_guests=on_guests, on_settings=on_settings, on_error=on_error)
        self._subscribers.append(subscriber)
        self._deliver(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def emit_error(self, message: str = "connection lost") -> None:
        error = ConnectivityLossError(message)
        for subscriber in list(self._subscribers):
            subscriber.on_error(error)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _publish(self) -> None:
        for subscriber in list(self._subscribers):
            self._deliver(subscriber)

    def _deliver(self, subscriber: _Subscriber) -> None:
        try:
            guests = self.fetch_guests()
            settings = self.fetch_settings()
        except ConnectivityLossError as exc:
            subscriber.on_error(exc)
            return
        subscriber.on_guests(guests)
        if settings is not None:
            subscriber.on_settings(settings)

    def _check_reachable(self) -> None:
        if self.fail_reads:
            raise ConnectivityLossError("remote store unreachable")

    def _check_writable(self) -> None:
        if self.fail_writes:
            raise SyncPropagationError("remote store rejected the write")


if TYPE_CHECKING:
    from rollcall.domain.ports import RemoteDocumentStore, SnapshotSource

    _store_check: RemoteDocumentStore = InMemoryDocumentStore()
    _source_check: SnapshotSource = InMemoryDocumentStore()
