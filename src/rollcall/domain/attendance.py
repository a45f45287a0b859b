"""Direct (desk-driven) attendance changes.

Manual toggling treats rounds as mutually exclusive: a guest sits in one
round at a time, and switching a round off clears the guest entirely. Import
merging keeps its own rules in ``reconciliation.engine``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollcall.domain.errors import validate_round

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from rollcall.domain.model import Guest


def toggle_round(guest: Guest, round_number: int, *, now: datetime) -> Guest:
    """Flip ``round_number`` for ``guest`` and return the updated copy."""

    validate_round(round_number)
    updated = guest.copy()
    if round_number in updated.attended_rounds:
        updated.attended_rounds = []
        updated.is_introduced = False
    else:
        was_checked_in = updated.is_checked_in
        updated.attended_rounds = [round_number]
        if not was_checked_in or updated.check_in_time is None:
            updated.check_in_time = now
    updated.settle()
    return updated


def clear_check_in(guest: Guest) -> Guest:
    updated = guest.copy()
    updated.attended_rounds = []
    updated.check_in_time = None
    updated.is_introduced = False
    updated.settle()
    return updated


def clear_check_ins(guests: Iterable[Guest], ids: Iterable[str] | None = None) -> list[Guest]:
    """Clear attendance for ``ids`` (everyone when ``None``); returns the cleared copies."""

    wanted = None if ids is None else set(ids)
    return [clear_check_in(g) for g in guests if wanted is None or g.id in wanted]


def toggle_introduced(guest: Guest) -> Guest:
    updated = guest.copy()
    updated.is_introduced = not updated.is_introduced
    updated.settle()
    return updated


def reset_introductions(guests: Iterable[Guest]) -> list[Guest]:
    """Return copies of every introduced guest with the flag cleared."""

    cleared: list[Guest] = []
    for guest in guests:
        if not guest.is_introduced:
            continue
        updated = guest.copy()
        updated.is_introduced = False
        updated.settle()
        cleared.append(updated)
    return cleared
