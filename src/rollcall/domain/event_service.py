"""Application service: the single writer over the guest registry.

Every operation follows the same order:

1. compute and commit the new state in the :class:`GuestRegistry`
2. rewrite the local mirror
3. mirror the change to the remote store, best effort

Step 3 never raises and never undoes steps 1-2.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rollcall.config.event import DEFAULT_OUTBOUND_BATCH_SIZE
from rollcall.domain.errors import RemoteStoreError
from rollcall.domain.model import DrawMode, SystemSettings
from rollcall.domain.ports import SnapshotSource
from rollcall.domain.reconciliation import ImportStatus
from rollcall.domain.stats import registration_stats
from rollcall.domain.sync import ConnectivityStatus, OutboundMirror

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from rollcall.domain.lottery import DrawResult
    from rollcall.domain.model import Guest, ParsedGuestDraft
    from rollcall.domain.ports import LocalMirror, RemoteDocumentStore, Unsubscribe
    from rollcall.domain.reconciliation import ReconciliationResult
    from rollcall.domain.registry import GuestRegistry
    from rollcall.domain.stats import RegistrationStats
    from rollcall.domain.sync import MergeBackResult

log = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class EventService:
    def __init__(
        self,
        registry: GuestRegistry,
        *,
        local: LocalMirror | None = None,
        remote: RemoteDocumentStore | None = None,
        batch_size: int = DEFAULT_OUTBOUND_BATCH_SIZE,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.registry = registry
        self.local = local
        self.remote = remote
        self.status = ConnectivityStatus()
        self.outbound = OutboundMirror(remote, status=self.status, batch_size=batch_size)
        self._clock = clock
        self._unsubscribe: Unsubscribe | None = None

    # Read model -------------------------------------------------------------

    @property
    def guests(self) -> list[Guest]:
        return self.registry.snapshot()

    @property
    def settings(self) -> SystemSettings:
        return self.registry.settings

    def registration_stats(self) -> RegistrationStats:
        return registration_stats(
            self.registry.snapshot(), total_rounds=self.registry.settings.total_rounds
        )

    # Startup ----------------------------------------------------------------

    def load_local(self) -> bool:
        """Seed the registry from the local mirror; ``False`` if it was empty."""

        if self.local is None:
            return False
        guests = self.local.load_guests()
        settings = self.local.load_settings()
        if guests is not None:
            self.registry.commit(guests)
        if settings is not None:
            self.registry.replace_settings(settings)
        loaded = guests is not None or settings is not None
        if loaded:
            log.info("Loaded %s guests from the local mirror", len(self.registry))
        return loaded

    # Import -----------------------------------------------------------------

    def import_drafts(
        self,
        drafts: Iterable[ParsedGuestDraft],
        *,
        imported_at: datetime | None = None,
    ) -> ReconciliationResult:
        result = self.registry.import_drafts(drafts, imported_at=imported_at or self._clock())
        if result.status is ImportStatus.NOTHING_TO_IMPORT:
            log.info("Nothing to import (%s drafts rejected)", len(result.rejected))
            return result
        self._save_guests()
        self.outbound.push_guests(result.changed)
        return result

    def overwrite_from_drafts(
        self,
        drafts: Iterable[ParsedGuestDraft],
        *,
        imported_at: datetime | None = None,
    ) -> ReconciliationResult:
        """Drop every guest, locally and remotely, then import ``drafts``."""

        self.registry.clear()
        self._save_guests()
        self.outbound.clear_guests()
        return self.import_drafts(drafts, imported_at=imported_at)

    def update_guest_info(self, guest_id: str, **changes: object) -> Guest:
        return self._commit_guest(self.registry.update_guest(guest_id, **changes))

    def delete_guest(self, guest_id: str) -> Guest:
        removed = self.registry.remove(guest_id)
        self._save_guests()
        self.outbound.delete_guests([guest_id])
        return removed

    # Attendance -------------------------------------------------------------

    def toggle_check_in_round(self, guest_id: str, round_number: int) -> Guest:
        return self._commit_guest(
            self.registry.toggle_check_in_round(guest_id, round_number, now=self._clock())
        )

    def clear_guest_check_in(self, guest_id: str) -> Guest:
        self.registry.get(guest_id)
        (cleared,) = self._commit_guests(self.registry.clear_check_ins([guest_id]))
        return cleared

    def clear_check_ins_for_ids(self, guest_ids: Sequence[str]) -> list[Guest]:
        if not guest_ids:
            return []
        return self._commit_guests(self.registry.clear_check_ins(guest_ids))

    def clear_all_check_ins(self) -> list[Guest]:
        return self._commit_guests(self.registry.clear_check_ins())

    def toggle_introduced(self, guest_id: str) -> Guest:
        return self._commit_guest(self.registry.toggle_introduced(guest_id))

    def reset_introductions(self) -> list[Guest]:
        return self._commit_guests(self.registry.reset_introductions())

    # Lottery ----------------------------------------------------------------

    def draw_winner(self, mode: DrawMode = DrawMode.DEFAULT) -> DrawResult | None:
        result = self.registry.draw(mode, now=self._clock())
        if result is not None:
            self._commit_guest(result.winner)
        return result

    def revoke_winner(self, guest_id: str) -> Guest:
        return self._commit_guest(self.registry.revoke(guest_id))

    def remove_winner_from_round(self, guest_id: str, round_number: int) -> Guest:
        return self._commit_guest(self.registry.remove_winner_from_round(guest_id, round_number))

    def clear_lottery_round(self, round_number: int) -> list[Guest]:
        return self._commit_guests(self.registry.clear_lottery_round(round_number))

    def reset_lottery(self) -> list[Guest]:
        cleared = self._commit_guests(self.registry.reset_lottery())
        self._commit_settings({"lottery_round_counter": 1})
        return cleared

    def next_lottery_round(self) -> int:
        round_number = self.registry.next_lottery_round()
        self._commit_settings({"lottery_round_counter": round_number})
        return round_number

    def jump_to_lottery_round(self, round_number: int) -> int:
        self.registry.jump_to_lottery_round(round_number)
        self._commit_settings({"lottery_round_counter": round_number})
        return round_number

    # Settings and resets ----------------------------------------------------

    def update_settings(self, **changes: object) -> SystemSettings:
        self.registry.update_settings(**changes)
        self._commit_settings(changes)
        return self.registry.settings

    def reset_records(self, *, checkin: bool = False, lottery: bool = False) -> list[Guest]:
        """Clear attendance and/or lottery history, keeping the guest list itself."""

        changed: dict[str, Guest] = {}
        settings_changes: dict[str, object] = {}
        if checkin:
            for guest in self.registry.clear_check_ins():
                changed[guest.id] = guest
            settings_changes["current_check_in_round"] = 1
        if lottery:
            for guest in self.registry.reset_lottery():
                changed[guest.id] = guest
            settings_changes["lottery_round_counter"] = 1
        if settings_changes:
            self.registry.update_settings(**settings_changes)
            self._commit_settings(settings_changes)
        return self._commit_guests(list(changed.values()))

    def clear_all_data(self) -> None:
        """Remove every guest and restore default settings, locally and remotely."""

        defaults = SystemSettings()
        self.registry.clear()
        self.registry.replace_settings(defaults)
        self._save_guests()
        self._save_settings()
        # A subscribed store re-delivers its old settings after each write.
        self.outbound.clear_guests()
        self.outbound.put_settings(defaults)

    # Remote snapshots -------------------------------------------------------

    def apply_remote_snapshot(self, remote_guests: Iterable[Guest]) -> MergeBackResult:
        result = self.registry.apply_snapshot(remote_guests)
        self.status.mark_connected()
        self.status.using_local_data_protection = result.local_data_protection
        if result.local_data_protection:
            log.warning(
                "Remote store holds no guests; keeping %s local guests", result.kept_local
            )
        self._save_guests()
        return result

    def apply_remote_settings(self, settings: SystemSettings | None) -> None:
        if settings is None:
            return
        self.registry.replace_settings(settings)
        self._save_settings()

    def poll_remote(self) -> bool:
        """Fetch and merge one snapshot; ``False`` when the store was unreachable."""

        if self.remote is None:
            return False
        try:
            guests = self.remote.fetch_guests()
            settings = self.remote.fetch_settings()
        except RemoteStoreError as exc:
            self._on_snapshot_error(exc)
            return False
        self.apply_remote_snapshot(guests)
        self.apply_remote_settings(settings)
        return True

    def connect(self) -> bool:
        """Start receiving snapshots: subscribe when the store pushes, else poll once."""

        if self.remote is None:
            return False
        if not isinstance(self.remote, SnapshotSource):
            return self.poll_remote()
        self.disconnect()
        self._unsubscribe = self.remote.subscribe(
            on_guests=self.apply_remote_snapshot,
            on_settings=self.apply_remote_settings,
            on_error=self._on_snapshot_error,
        )
        return True

    def disconnect(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def upload_all_local_data(self) -> bool:
        """Push every local guest and the settings document to the remote store."""

        guests = self.registry.snapshot()
        settings = self.registry.settings
        pushed = self.outbound.push_guests(guests)
        pushed = self.outbound.put_settings(settings) and pushed
        if pushed:
            self.status.using_local_data_protection = False
        return pushed

    # Internals --------------------------------------------------------------

    def _commit_guest(self, guest: Guest) -> Guest:
        self._save_guests()
        self.outbound.push_guests([guest])
        return guest

    def _commit_guests(self, guests: list[Guest]) -> list[Guest]:
        if guests:
            self._save_guests()
            self.outbound.push_guests(guests)
        return guests

    def _commit_settings(self, changes: dict[str, object]) -> None:
        self._save_settings()
        self.outbound.patch_settings(changes)

    def _save_guests(self) -> None:
        if self.local is not None:
            self.local.save_guests(self.registry.snapshot())

    def _save_settings(self) -> None:
        if self.local is not None:
            self.local.save_settings(self.registry.settings)

    def _on_snapshot_error(self, error: RemoteStoreError) -> None:
        log.warning("Remote snapshot failed, running on local data: %s", error)
        self.status.mark_degraded(str(error))
