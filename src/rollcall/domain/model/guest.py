"""The guest record and its derived-state normalisation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING
from uuid import uuid4

from rollcall.domain.errors import validate_round
from rollcall.domain.model.enums import GuestCategory

if TYPE_CHECKING:
    from datetime import datetime


def new_guest_id() -> str:
    return str(uuid4())


@dataclass(kw_only=True)
class Guest:
    """One real-world attendee.

    ``is_checked_in``, ``is_winner`` and ``round`` are computed from the round
    lists and cannot drift from them. Stored state that depends on the lists
    (``check_in_time``, ``win_round``, ``won_times``) is brought back in line by
    :meth:`settle`, which every mutation path calls last.
    """

    name: str
    id: str = field(default_factory=new_guest_id)
    code: str = ""
    title: str = ""
    note: str = ""
    category: GuestCategory = GuestCategory.OTHER

    attended_rounds: list[int] = field(default_factory=list[int])
    check_in_time: datetime | None = None
    is_introduced: bool = False

    won_rounds: list[int] = field(default_factory=list[int])
    win_round: int | None = None
    won_times: dict[int, datetime] = field(default_factory=dict[int, "datetime"])

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Guest name must not be blank")
        self.settle()

    @property
    def is_checked_in(self) -> bool:
        return len(self.attended_rounds) > 0

    @property
    def is_winner(self) -> bool:
        return len(self.won_rounds) > 0

    @property
    def round(self) -> int | None:
        """Legacy single-round display value."""
        return max(self.attended_rounds) if self.attended_rounds else None

    def settle(self) -> None:
        self.attended_rounds = sorted({validate_round(r) for r in self.attended_rounds})
        if not self.attended_rounds:
            self.check_in_time = None

        self.won_rounds = sorted({validate_round(r) for r in self.won_rounds})
        self.won_times = {r: t for r, t in self.won_times.items() if r in self.won_rounds}
        if not self.won_rounds:
            self.win_round = None
        elif self.win_round not in self.won_rounds:
            self.win_round = max(self.won_rounds)

    def copy(self) -> Guest:
        """Detached copy; mutating it never touches the original."""
        return replace(
            self,
            attended_rounds=list(self.attended_rounds),
            won_rounds=list(self.won_rounds),
            won_times=dict(self.won_times),
        )
