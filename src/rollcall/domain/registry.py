"""The in-memory guest registry: sole owner of guest records in the process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rollcall.domain import attendance, lottery
from rollcall.domain.errors import GuestNotFoundError, validate_round
from rollcall.domain.model import GuestCategory, SystemSettings
from rollcall.domain.reconciliation import ImportStatus, merge_drafts
from rollcall.domain.sync import merge_remote_snapshot

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from rollcall.domain.lottery import DrawResult
    from rollcall.domain.model import DrawMode, Guest, ParsedGuestDraft
    from rollcall.domain.reconciliation import ReconciliationResult
    from rollcall.domain.sync import MergeBackResult

log = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "code", "title", "note", "category", "is_introduced"})


class GuestRegistry:
    """Authoritative guest list and settings.

    Readers always receive copies. Every mutation computes the new state with
    the pure domain functions and swaps it in as a whole, so no caller ever
    observes a half-applied merge, toggle or draw.
    """

    def __init__(
        self,
        guests: Iterable[Guest] = (),
        *,
        settings: SystemSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._guests: list[Guest] = []
        self._settings = settings or SystemSettings()
        self._rng = rng
        self.commit(list(guests))

    # Read model -------------------------------------------------------------

    @property
    def settings(self) -> SystemSettings:
        return self._settings

    def snapshot(self) -> list[Guest]:
        return [guest.copy() for guest in self._guests]

    def find(self, guest_id: str) -> Guest | None:
        position = self._position(guest_id)
        return None if position is None else self._guests[position].copy()

    def get(self, guest_id: str) -> Guest:
        guest = self.find(guest_id)
        if guest is None:
            raise GuestNotFoundError(guest_id)
        return guest

    def __len__(self) -> int:
        return len(self._guests)

    def __contains__(self, guest_id: object) -> bool:
        return isinstance(guest_id, str) and self._position(guest_id) is not None

    # Raw commits ------------------------------------------------------------

    def commit(self, guests: Sequence[Guest]) -> None:
        """Replace the whole guest list."""

        ids = [guest.id for guest in guests]
        if len(set(ids)) != len(ids):
            raise ValueError("Guest ids must be unique within the registry")
        self._guests = [guest.copy() for guest in guests]

    def upsert(self, *guests: Guest) -> None:
        """Replace guests in place by id; unknown ids are appended."""

        for guest in guests:
            position = self._position(guest.id)
            if position is None:
                self._guests.append(guest.copy())
            else:
                self._guests[position] = guest.copy()

    def remove(self, guest_id: str) -> Guest:
        position = self._position(guest_id)
        if position is None:
            raise GuestNotFoundError(guest_id)
        return self._guests.pop(position)

    def clear(self) -> None:
        self._guests = []

    def replace_settings(self, settings: SystemSettings) -> None:
        self._settings = settings

    def update_settings(self, **changes: object) -> SystemSettings:
        self._settings = self._settings.with_changes(**changes)
        return self._settings

    # Import -----------------------------------------------------------------

    def import_drafts(
        self,
        drafts: Iterable[ParsedGuestDraft],
        *,
        imported_at: datetime,
    ) -> ReconciliationResult:
        result = merge_drafts(
            self._guests,
            drafts,
            imported_at=imported_at,
            global_round=self._settings.current_check_in_round,
        )
        if result.status is ImportStatus.IMPORTED:
            self.commit(result.guests)
        return result

    def update_guest(self, guest_id: str, **changes: object) -> Guest:
        """Edit descriptive fields; attendance and wins have dedicated operations."""

        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise TypeError(f"Fields cannot be edited directly: {', '.join(unknown)}")
        guest = self.get(guest_id)
        for name, value in changes.items():
            setattr(guest, name, value)
        if not guest.name or not guest.name.strip():
            raise ValueError("Guest name must not be blank")
        guest.name = guest.name.strip()
        guest.category = GuestCategory(guest.category)
        guest.settle()
        self.upsert(guest)
        return guest.copy()

    # Attendance -------------------------------------------------------------

    def toggle_check_in_round(self, guest_id: str, round_number: int, *, now: datetime) -> Guest:
        updated = attendance.toggle_round(self.get(guest_id), round_number, now=now)
        self.upsert(updated)
        return updated

    def clear_check_ins(self, guest_ids: Iterable[str] | None = None) -> list[Guest]:
        cleared = attendance.clear_check_ins(self._guests, guest_ids)
        self.upsert(*cleared)
        return cleared

    def toggle_introduced(self, guest_id: str) -> Guest:
        updated = attendance.toggle_introduced(self.get(guest_id))
        self.upsert(updated)
        return updated

    def reset_introductions(self) -> list[Guest]:
        cleared = attendance.reset_introductions(self._guests)
        self.upsert(*cleared)
        return cleared

    # Lottery ----------------------------------------------------------------

    def draw(self, mode: DrawMode, *, now: datetime) -> DrawResult | None:
        result = lottery.draw(
            self._guests,
            mode,
            self._settings.lottery_round_counter,
            now=now,
            rng=self._rng,
        )
        if result is not None:
            self.upsert(result.winner)
        return result

    def revoke(self, guest_id: str) -> Guest:
        updated = lottery.revoke(self.get(guest_id))
        self.upsert(updated)
        return updated

    def remove_winner_from_round(self, guest_id: str, round_number: int) -> Guest:
        updated = lottery.remove_winner_from_round(self.get(guest_id), round_number)
        self.upsert(updated)
        return updated

    def clear_lottery_round(self, round_number: int) -> list[Guest]:
        cleared = lottery.clear_round(self._guests, round_number)
        self.upsert(*cleared)
        return cleared

    def reset_lottery(self) -> list[Guest]:
        cleared = lottery.reset_lottery(self._guests)
        self.upsert(*cleared)
        self.update_settings(lottery_round_counter=1)
        return cleared

    def next_lottery_round(self) -> int:
        return self.jump_to_lottery_round(self._settings.lottery_round_counter + 1)

    def jump_to_lottery_round(self, round_number: int) -> int:
        validate_round(round_number)
        self.update_settings(lottery_round_counter=round_number)
        return round_number

    # Sync -------------------------------------------------------------------

    def apply_snapshot(self, remote: Iterable[Guest]) -> MergeBackResult:
        result = merge_remote_snapshot(self._guests, remote)
        self.commit(result.guests)
        log.debug(
            "Merged remote snapshot: replaced=%s, appended=%s, kept_local=%s",
            result.replaced,
            result.appended,
            result.kept_local,
        )
        return result

    def _position(self, guest_id: str) -> int | None:
        for position, guest in enumerate(self._guests):
            if guest.id == guest_id:
                return position
        return None
