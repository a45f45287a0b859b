"""Keyword rules mapping free text onto guest categories.

Rules are evaluated top to bottom and the first match wins, so membership
markers (OB/YB) outrank role words that often appear next to them.
"""

from __future__ import annotations

from typing import Final

from rollcall.domain.model import GuestCategory

type CategoryRule = tuple[tuple[str, ...], GuestCategory]

CATEGORY_RULES: Final[tuple[CategoryRule, ...]] = (
    (("OB", "特友"), GuestCategory.MEMBER_OB),
    (("YB", "會友"), GuestCategory.MEMBER_YB),
    (("會長",), GuestCategory.PAST_PRESIDENT),
    (("主席",), GuestCategory.PAST_CHAIRMAN),
    (("總會",), GuestCategory.HQ_GUEST),
    (("政府", "議員", "長官"), GuestCategory.GOV_OFFICIAL),
    (("友會",), GuestCategory.VISITING_CHAPTER),
)


def infer_category(text: str | None) -> GuestCategory | None:
    """Return the first category whose keyword occurs in ``text``."""

    if not text:
        return None
    stripped = text.strip()
    for keywords, category in CATEGORY_RULES:
        if any(keyword in stripped for keyword in keywords):
            return category
    return None


def resolve_category(
    value: GuestCategory | str | None,
    *,
    context: str = "",
) -> GuestCategory:
    """Map a draft's category field onto a :class:`GuestCategory`.

    An exact category value is kept as is. Other text goes through the rule
    table; when that yields nothing, ``context`` (title, note, sheet name) is
    tried before falling back to ``OTHER``.
    """

    if isinstance(value, GuestCategory):
        return value
    if value:
        try:
            return GuestCategory(value.strip())
        except ValueError:
            pass
        inferred = infer_category(value)
        if inferred is not None:
            return inferred
    return infer_category(context) or GuestCategory.OTHER
