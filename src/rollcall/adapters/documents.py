"""Pydantic models for the JSON documents shared by the local and remote mirrors.

Documents use camelCase keys (``attendedRounds``, ``checkInTime``...) and
carry the derived flags for display consumers; on the way back in the flags
are ignored and recomputed from the round lists.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from rollcall.config.event import DEFAULT_EVENT_NAME
from rollcall.domain.model import Guest, GuestCategory, SystemSettings
from rollcall.domain.reconciliation import resolve_category

log = logging.getLogger(__name__)


def _none_to_blank(value: object) -> object:
    return "" if value is None else value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class GuestDocument(DocumentModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    code: str = ""
    title: str = ""
    note: str = ""
    category: GuestCategory = GuestCategory.OTHER
    attended_rounds: list[int] = Field(default_factory=list[int])
    is_checked_in: bool = False
    check_in_time: datetime | None = None
    round: int | None = None
    is_introduced: bool = False
    won_rounds: list[int] = Field(default_factory=list[int])
    is_winner: bool = False
    win_round: int | None = None
    won_times: dict[int, datetime] = Field(default_factory=dict[int, datetime])

    _blank_strings = field_validator("code", "title", "note", mode="before")(_none_to_blank)

    @field_validator("category", mode="before")
    @classmethod
    def _lenient_category(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return resolve_category(value)
        return value

    @field_validator("attended_rounds", "won_rounds", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("won_times", mode="before")
    @classmethod
    def _null_mapping(cls, value: object) -> object:
        return {} if value is None else value

    @classmethod
    def from_domain(cls, guest: Guest) -> GuestDocument:
        return cls(
            id=guest.id,
            name=guest.name,
            code=guest.code,
            title=guest.title,
            note=guest.note,
            category=guest.category,
            attended_rounds=list(guest.attended_rounds),
            is_checked_in=guest.is_checked_in,
            check_in_time=guest.check_in_time,
            round=guest.round,
            is_introduced=guest.is_introduced,
            won_rounds=list(guest.won_rounds),
            is_winner=guest.is_winner,
            win_round=guest.win_round,
            won_times=dict(guest.won_times),
        )

    def to_domain(self) -> Guest:
        return Guest(
            id=self.id,
            name=self.name.strip(),
            code=self.code,
            title=self.title,
            note=self.note,
            category=self.category,
            attended_rounds=list(self.attended_rounds),
            check_in_time=_as_utc(self.check_in_time) if self.check_in_time else None,
            is_introduced=self.is_introduced,
            won_rounds=list(self.won_rounds),
            win_round=self.win_round,
            won_times={r: _as_utc(t) for r, t in self.won_times.items()},
        )


class SettingsDocument(DocumentModel):
    event_name: str = DEFAULT_EVENT_NAME
    brief_schedule: str = ""
    current_check_in_round: int = 1
    lottery_round_counter: int = 1
    total_rounds: int = 2

    _blank_strings = field_validator("brief_schedule", mode="before")(_none_to_blank)

    @classmethod
    def from_domain(cls, settings: SystemSettings) -> SettingsDocument:
        return cls(
            event_name=settings.event_name,
            brief_schedule=settings.brief_schedule,
            current_check_in_round=settings.current_check_in_round,
            lottery_round_counter=settings.lottery_round_counter,
            total_rounds=settings.total_rounds,
        )

    def to_domain(self) -> SystemSettings:
        return SystemSettings(
            event_name=self.event_name,
            brief_schedule=self.brief_schedule,
            current_check_in_round=self.current_check_in_round,
            lottery_round_counter=self.lottery_round_counter,
            total_rounds=self.total_rounds,
        )


def guest_to_payload(guest: Guest) -> dict[str, Any]:
    return GuestDocument.from_domain(guest).model_dump(mode="json", by_alias=True)


def guests_from_payloads(payloads: Iterable[object]) -> list[Guest]:
    """Translate stored documents, skipping (and logging) the unreadable ones."""

    guests: list[Guest] = []
    for payload in payloads:
        try:
            guests.append(GuestDocument.model_validate(payload).to_domain())
        except (ValidationError, ValueError) as exc:
            log.warning("Skipping unreadable guest document: %s", exc)
    return guests


def settings_to_payload(settings: SystemSettings) -> dict[str, Any]:
    return SettingsDocument.from_domain(settings).model_dump(mode="json", by_alias=True)


def settings_from_payload(payload: object) -> SystemSettings:
    return SettingsDocument.model_validate(payload).to_domain()


def settings_patch_payload(changes: Mapping[str, object]) -> dict[str, object]:
    """Rename settings field names to document keys for a partial update."""

    fields = SettingsDocument.model_fields
    unknown = sorted(set(changes) - set(fields))
    if unknown:
        raise ValueError(f"Unknown settings fields: {', '.join(unknown)}")
    return {to_camel(name): value for name, value in changes.items()}
