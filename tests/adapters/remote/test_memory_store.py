from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rollcall.domain.errors import ConnectivityLossError, RemoteStoreError, SyncPropagationError
from rollcall.domain.model import SystemSettings
from rollcall.domain.ports import RemoteDocumentStore, SnapshotSource
from tests.helpers.guests import make_guest

if TYPE_CHECKING:
    from rollcall.adapters.remote import InMemoryDocumentStore
    from rollcall.domain.model import Guest


def test_memory_store_satisfies_the_ports(memory_store: InMemoryDocumentStore) -> None:
    assert isinstance(memory_store, RemoteDocumentStore)
    assert isinstance(memory_store, SnapshotSource)


def test_subscribers_receive_snapshots_on_every_write(
    memory_store: InMemoryDocumentStore,
) -> None:
    snapshots: list[list[Guest]] = []
    settings: list[SystemSettings] = []
    errors: list[RemoteStoreError] = []

    unsubscribe = memory_store.subscribe(
        on_guests=snapshots.append, on_settings=settings.append, on_error=errors.append
    )
    memory_store.put_guests([make_guest("甲", guest_id="g1")])
    memory_store.patch_settings({"total_rounds": 3})
    unsubscribe()
    memory_store.clear_guests()

    assert [[g.id for g in snapshot] for snapshot in snapshots] == [[], ["g1"], ["g1"]]
    assert settings == [SystemSettings(total_rounds=3)]
    assert errors == []


def test_failure_switches(memory_store: InMemoryDocumentStore) -> None:
    memory_store.fail_writes = True
    with pytest.raises(SyncPropagationError):
        memory_store.put_settings(SystemSettings())

    memory_store.fail_reads = True
    with pytest.raises(ConnectivityLossError):
        memory_store.fetch_guests()

    errors: list[RemoteStoreError] = []
    memory_store.subscribe(
        on_guests=lambda _: None, on_settings=lambda _: None, on_error=errors.append
    )
    assert len(errors) == 1


def test_delete_guests_ignores_unknown_ids(memory_store: InMemoryDocumentStore) -> None:
    memory_store.put_guests([make_guest("甲", guest_id="g1"), make_guest("乙", guest_id="g2")])

    memory_store.delete_guests(["g1", "missing"])

    assert [g.id for g in memory_store.fetch_guests()] == ["g2"]
