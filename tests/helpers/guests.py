"""Builders and fakes shared by guest-related tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rollcall.domain.model import Guest, GuestCategory, ParsedGuestDraft, SystemSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

CHECK_IN_AT = datetime(2024, 5, 18, 8, 0, tzinfo=UTC)


def make_guest(
    name: str = "王小明",
    *,
    guest_id: str | None = None,
    rounds: Sequence[int] = (),
    won: Sequence[int] = (),
    introduced: bool = False,
    category: GuestCategory = GuestCategory.OTHER,
    title: str = "",
) -> Guest:
    """Create a guest; checked-in guests get a fixed check-in time."""

    guest = Guest(
        name=name,
        title=title,
        category=category,
        attended_rounds=list(rounds),
        check_in_time=CHECK_IN_AT if rounds else None,
        is_introduced=introduced,
        won_rounds=list(won),
        won_times={r: CHECK_IN_AT for r in won},
    )
    if guest_id is not None:
        guest.id = guest_id
    return guest


def make_draft(
    name: str,
    *,
    signed: bool = False,
    forced_round: int | None = None,
    title: str = "",
    note: str = "",
    code: str = "",
    category: GuestCategory | str | None = None,
) -> ParsedGuestDraft:
    return ParsedGuestDraft(
        name=name,
        code=code,
        title=title,
        note=note,
        category=category,
        has_signature=signed,
        forced_round=forced_round,
    )


@dataclass
class FakeLocalMirror:
    """Records every save instead of touching a database."""

    guests: list[Guest] | None = None
    settings: SystemSettings | None = None
    guest_saves: int = 0
    settings_saves: int = 0
    saved_snapshots: list[list[Guest]] = field(default_factory=list[list[Guest]])

    def load_guests(self) -> list[Guest] | None:
        return None if self.guests is None else [g.copy() for g in self.guests]

    def load_settings(self) -> SystemSettings | None:
        return self.settings

    def save_guests(self, guests: Sequence[Guest]) -> None:
        self.guests = [g.copy() for g in guests]
        self.saved_snapshots.append(self.guests)
        self.guest_saves += 1

    def save_settings(self, settings: SystemSettings) -> None:
        self.settings = settings
        self.settings_saves += 1
