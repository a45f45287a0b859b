"""Ports for the shared remote document store.

The store holds a ``guests`` collection keyed by guest id and a single
``config/mainSettings`` document. Adapters raise
:class:`~rollcall.domain.errors.SyncPropagationError` for failed writes and
:class:`~rollcall.domain.errors.ConnectivityLossError` for failed reads.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from rollcall.domain.errors import RemoteStoreError
    from rollcall.domain.model import Guest, SystemSettings

type Unsubscribe = Callable[[], None]


@runtime_checkable
class RemoteDocumentStore(Protocol):
    def fetch_guests(self) -> list[Guest]: ...

    def fetch_settings(self) -> SystemSettings | None: ...

    def put_guests(self, guests: Sequence[Guest]) -> None:
        """Overwrite one document per guest in a single batch."""
        ...

    def delete_guests(self, guest_ids: Sequence[str]) -> None: ...

    def clear_guests(self) -> None: ...

    def patch_settings(self, changes: Mapping[str, object]) -> None:
        """Merge ``changes`` (settings field names) into the settings document."""
        ...

    def put_settings(self, settings: SystemSettings) -> None: ...


@runtime_checkable
class SnapshotSource(Protocol):
    """A store that pushes full snapshots whenever its contents change."""

    def subscribe(
        self,
        *,
        on_guests: Callable[[list[Guest]], None],
        on_settings: Callable[[SystemSettings], None],
        on_error: Callable[[RemoteStoreError], None],
    ) -> Unsubscribe: ...
