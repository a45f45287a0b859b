"""Draft normalization: validate and clean raw import records.

Responsibilities of this stage:
- drop drafts without a usable name
- drop header cells misread as guest rows
- trim descriptive fields and settle the category
- avoid any registry access or side effects
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Final

from rollcall.domain.model import DraftRejection, ParsedGuestDraft, RejectionReason

from .categories import infer_category, resolve_category

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollcall.domain.model import GuestCategory

log = logging.getLogger(__name__)

HEADER_TOKENS: Final[frozenset[str]] = frozenset(
    {
        "姓名", "name", "name(english)", "會員姓名",
        "編號", "序號", "code", "id", "no", "no.",
        "職稱", "title", "position",
        "備註", "note", "remark",
        "類別", "category", "group",
        "簽名", "signature", "sign",
        "r1", "r2", "checkin",
    }
)  # fmt: skip

_WHITESPACE = re.compile(r"\s+")


@dataclass(slots=True)
class NormalizationResult:
    """Drafts that survived normalization plus the ones that were dropped."""

    accepted: list[ParsedGuestDraft] = field(default_factory=list[ParsedGuestDraft])
    rejected: list[DraftRejection] = field(default_factory=list[DraftRejection])

    @property
    def is_empty(self) -> bool:
        return not self.accepted


def header_key(name: str) -> str:
    return _WHITESPACE.sub("", name).casefold()


def normalize_draft(draft: ParsedGuestDraft) -> ParsedGuestDraft | DraftRejection:
    """Return a cleaned copy of ``draft`` or the reason it was rejected."""

    name = (draft.name or "").strip()
    if not name:
        return DraftRejection(RejectionReason.EMPTY_NAME, raw_name=draft.name or "")
    if header_key(name) in HEADER_TOKENS:
        return DraftRejection(RejectionReason.HEADER_TOKEN, raw_name=name)

    title = (draft.title or "").strip()
    note = (draft.note or "").strip()
    context = " ".join(part for part in (title, note, draft.source_hint) if part)
    return replace(
        draft,
        name=name,
        code=(draft.code or "").strip(),
        title=title,
        note=note,
        category=_settle_category(draft.category, context),
    )


def _settle_category(value: GuestCategory | str | None, context: str) -> GuestCategory | None:
    # None means nothing was given or inferred; an existing category then stays.
    if value is None or (isinstance(value, str) and not value.strip()):
        return infer_category(context)
    return resolve_category(value, context=context)


def normalize_drafts(drafts: Iterable[ParsedGuestDraft]) -> NormalizationResult:
    result = NormalizationResult()
    for draft in drafts:
        outcome = normalize_draft(draft)
        if isinstance(outcome, DraftRejection):
            log.debug("Dropped draft %r: %s", outcome.raw_name, outcome.reason)
            result.rejected.append(outcome)
            continue
        result.accepted.append(outcome)
    return result
