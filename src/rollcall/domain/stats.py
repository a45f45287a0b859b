"""Read model for registration dashboards."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollcall.domain.model import Guest, GuestCategory


@dataclass(frozen=True, slots=True)
class RegistrationStats:
    total: int
    checked_in: int
    introduced: int
    winners: int
    by_round: dict[int, int] = field(default_factory=dict[int, int])
    by_category: dict[GuestCategory, int] = field(default_factory=dict["GuestCategory", int])

    @property
    def pending(self) -> int:
        return self.total - self.checked_in


def registration_stats(guests: Iterable[Guest], *, total_rounds: int) -> RegistrationStats:
    """Summarise attendance; rounds ``1..total_rounds`` are always reported."""

    rounds: Counter[int] = Counter({r: 0 for r in range(1, total_rounds + 1)})
    categories: Counter[GuestCategory] = Counter()
    total = checked_in = introduced = winners = 0
    for guest in guests:
        total += 1
        if guest.is_checked_in:
            checked_in += 1
            categories[guest.category] += 1
        rounds.update(guest.attended_rounds)
        introduced += guest.is_introduced
        winners += guest.is_winner
    return RegistrationStats(
        total=total,
        checked_in=checked_in,
        introduced=introduced,
        winners=winners,
        by_round=dict(sorted(rounds.items())),
        by_category=dict(categories),
    )
