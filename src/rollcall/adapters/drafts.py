"""Validation of externally supplied guest drafts (roster parsers, AI extraction)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from rollcall.domain.model import DraftRejection, ParsedGuestDraft, RejectionReason

log = logging.getLogger(__name__)


def _as_text(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class DraftPayload(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    name: str
    code: str = ""
    title: str = ""
    note: str = ""
    category: str | None = None
    has_signature: bool = False
    forced_round: int | None = Field(default=None, ge=1)

    _text_fields = field_validator("name", "code", "title", "note", mode="before")(_as_text)

    def to_draft(self, *, source_hint: str = "") -> ParsedGuestDraft:
        return ParsedGuestDraft(
            name=self.name,
            code=self.code,
            title=self.title,
            note=self.note,
            category=self.category,
            has_signature=self.has_signature,
            forced_round=self.forced_round,
            source_hint=source_hint,
        )


@dataclass(slots=True)
class ParsedPayloads:
    drafts: list[ParsedGuestDraft] = field(default_factory=list[ParsedGuestDraft])
    rejected: list[DraftRejection] = field(default_factory=list[DraftRejection])


def parse_draft_payloads(
    payloads: Iterable[object],
    *,
    source_hint: str = "",
) -> ParsedPayloads:
    """Validate each payload on its own; malformed ones become rejections."""

    parsed = ParsedPayloads()
    for payload in payloads:
        try:
            model = DraftPayload.model_validate(payload)
        except ValidationError as exc:
            raw_name = (
                cast(dict[str, object], payload).get("name") if isinstance(payload, dict) else None
            )
            log.debug("Malformed draft payload %r: %s", raw_name, exc)
            parsed.rejected.append(
                DraftRejection(
                    RejectionReason.MALFORMED,
                    raw_name=str(raw_name or ""),
                    detail=str(exc),
                )
            )
            continue
        parsed.drafts.append(model.to_draft(source_hint=source_hint))
    return parsed
