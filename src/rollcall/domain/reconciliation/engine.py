"""Merge normalized drafts into the guest list.

The merge is keyed on the trimmed guest name and never touches the inputs:
the caller receives a complete new guest list and decides when to commit it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from rollcall.domain.errors import InvalidRoundError, validate_round
from rollcall.domain.model import (
    DraftRejection,
    Guest,
    GuestCategory,
    RejectionReason,
    new_guest_id,
)

from .normalize import normalize_drafts

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import datetime

    from rollcall.domain.model import ParsedGuestDraft

log = logging.getLogger(__name__)


class ImportStatus(StrEnum):
    IMPORTED = "imported"
    NOTHING_TO_IMPORT = "nothing_to_import"


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of one merge run."""

    guests: list[Guest]
    changed: list[Guest] = field(default_factory=list[Guest])
    created: int = 0
    updated: int = 0
    rejected: list[DraftRejection] = field(default_factory=list[DraftRejection])

    @property
    def status(self) -> ImportStatus:
        if self.created == 0 and self.updated == 0:
            return ImportStatus.NOTHING_TO_IMPORT
        return ImportStatus.IMPORTED


def merge_drafts(
    guests: Sequence[Guest],
    drafts: Iterable[ParsedGuestDraft],
    *,
    imported_at: datetime,
    global_round: int,
    id_factory: Callable[[], str] = new_guest_id,
) -> ReconciliationResult:
    """Reconcile ``drafts`` against ``guests`` in input order."""

    validate_round(global_round)
    normalization = normalize_drafts(drafts)

    merged = [guest.copy() for guest in guests]
    index_by_name = {guest.name.strip(): position for position, guest in enumerate(merged)}
    changed: dict[str, Guest] = {}
    created_ids: set[str] = set()
    updated = 0
    rejected = list(normalization.rejected)

    for draft in normalization.accepted:
        try:
            target_round = (
                validate_round(draft.forced_round)
                if draft.forced_round is not None
                else global_round
            )
        except InvalidRoundError as exc:
            log.debug("Dropped draft %r: %s", draft.name, exc)
            rejected.append(
                DraftRejection(RejectionReason.MALFORMED, raw_name=draft.name, detail=str(exc))
            )
            continue

        position = index_by_name.get(draft.name)
        if position is None:
            guest = _new_guest(
                draft,
                target_round=target_round,
                imported_at=imported_at,
                guest_id=id_factory(),
            )
            index_by_name[guest.name] = len(merged)
            merged.append(guest)
            created_ids.add(guest.id)
        else:
            guest = merged[position]
            _apply_draft(guest, draft, target_round=target_round, imported_at=imported_at)
            if guest.id not in created_ids:
                updated += 1
        changed[guest.id] = guest

    result = ReconciliationResult(
        guests=merged,
        changed=list(changed.values()),
        created=len(created_ids),
        updated=updated,
        rejected=rejected,
    )
    log.info(
        "Reconciled drafts: created=%s, updated=%s, rejected=%s",
        result.created,
        result.updated,
        len(result.rejected),
    )
    return result


def _new_guest(
    draft: ParsedGuestDraft,
    *,
    target_round: int,
    imported_at: datetime,
    guest_id: str,
) -> Guest:
    checked_in = draft.has_signature
    return Guest(
        id=guest_id,
        name=draft.name,
        code=draft.code,
        title=draft.title,
        note=draft.note,
        category=_category_of(draft),
        attended_rounds=[target_round] if checked_in else [],
        check_in_time=imported_at if checked_in else None,
    )


def _apply_draft(
    guest: Guest,
    draft: ParsedGuestDraft,
    *,
    target_round: int,
    imported_at: datetime,
) -> None:
    # An existing check-in is sticky: later signatures never move the guest.
    if draft.has_signature and not guest.is_checked_in:
        guest.attended_rounds = [target_round]
        guest.check_in_time = imported_at
        guest.is_introduced = False

    if draft.title:
        guest.title = draft.title
    if draft.note:
        guest.note = draft.note
    if draft.code:
        guest.code = draft.code
    if draft.category is not None:
        guest.category = _category_of(draft)
    guest.settle()


def _category_of(draft: ParsedGuestDraft) -> GuestCategory:
    # normalize_draft leaves a GuestCategory or None
    category = draft.category
    return category if isinstance(category, GuestCategory) else GuestCategory.OTHER
