"""Transient import records produced by roster/sheet parsers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from rollcall.domain.model.enums import GuestCategory


@dataclass(frozen=True, slots=True, kw_only=True)
class ParsedGuestDraft:
    """An unvalidated candidate guest.

    ``category`` is either a known :class:`GuestCategory` or free text (a
    spreadsheet cell, an AI label) that the normalizer maps onto one.
    ``source_hint`` carries context such as the sheet name and only feeds
    category inference.
    """

    name: str
    code: str = ""
    title: str = ""
    note: str = ""
    category: GuestCategory | str | None = None
    has_signature: bool = False
    forced_round: int | None = None
    source_hint: str = ""


class RejectionReason(StrEnum):
    EMPTY_NAME = "empty_name"
    HEADER_TOKEN = "header_token"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class DraftRejection:
    """A draft dropped before reconciliation."""

    reason: RejectionReason
    raw_name: str = ""
    detail: str | None = None
