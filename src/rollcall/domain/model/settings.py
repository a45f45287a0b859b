"""Process-wide event settings."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from rollcall.config.event import (
    DEFAULT_CHECK_IN_ROUND,
    DEFAULT_EVENT_NAME,
    DEFAULT_LOTTERY_ROUND,
    DEFAULT_TOTAL_ROUNDS,
)
from rollcall.domain.errors import validate_round


@dataclass(frozen=True, slots=True, kw_only=True)
class SystemSettings:
    event_name: str = DEFAULT_EVENT_NAME
    brief_schedule: str = ""
    current_check_in_round: int = DEFAULT_CHECK_IN_ROUND
    lottery_round_counter: int = DEFAULT_LOTTERY_ROUND
    total_rounds: int = DEFAULT_TOTAL_ROUNDS

    def __post_init__(self) -> None:
        validate_round(self.current_check_in_round)
        validate_round(self.lottery_round_counter)
        validate_round(self.total_rounds)

    def with_changes(self, **changes: object) -> SystemSettings:
        """Return a copy with ``changes`` applied; unknown keys are rejected."""

        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"Unknown settings fields: {', '.join(unknown)}")
        return replace(self, **changes)  # pyright: ignore[reportArgumentType]
