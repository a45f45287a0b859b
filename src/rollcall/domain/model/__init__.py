"""Public domain model surface."""

from __future__ import annotations

from rollcall.domain.model.draft import DraftRejection, ParsedGuestDraft, RejectionReason
from rollcall.domain.model.enums import DrawMode, GuestCategory
from rollcall.domain.model.guest import Guest, new_guest_id
from rollcall.domain.model.settings import SystemSettings

__all__ = [
    "DraftRejection",
    "DrawMode",
    "Guest",
    "GuestCategory",
    "ParsedGuestDraft",
    "RejectionReason",
    "SystemSettings",
    "new_guest_id",
]
