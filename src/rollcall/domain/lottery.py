"""Lottery draws over checked-in guests with per-round win tracking."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rollcall.domain.errors import validate_round
from rollcall.domain.model import DrawMode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from rollcall.domain.model import Guest

log = logging.getLogger(__name__)

_NO_CANDIDATES: dict[DrawMode, str] = {
    DrawMode.DEFAULT: "目前沒有符合資格的抽獎者 (本輪已全數中獎或尚無人報到)",
    DrawMode.ALL: "目前沒有已報到的嘉賓可供抽選",
    DrawMode.WINNERS_ONLY: "沒有已中獎者可供抽選 (或本輪已全數中獎)",
}


@dataclass(frozen=True, slots=True)
class DrawResult:
    winner: Guest
    round: int
    pool_size: int


def eligible_pool(guests: Iterable[Guest], mode: DrawMode, round_number: int) -> list[Guest]:
    """Guests a draw in ``round_number`` may pick, in registry order."""

    validate_round(round_number)
    if mode is DrawMode.WINNERS_ONLY:
        return [g for g in guests if g.is_winner and round_number not in g.won_rounds]
    return [g for g in guests if g.is_checked_in and round_number not in g.won_rounds]


def draw(
    guests: Sequence[Guest],
    mode: DrawMode,
    round_number: int,
    *,
    now: datetime,
    rng: random.Random | None = None,
) -> DrawResult | None:
    """Pick one eligible guest uniformly; ``None`` when nobody qualifies."""

    pool = eligible_pool(guests, mode, round_number)
    if not pool:
        log.info("No candidates for %s draw in round %s", mode, round_number)
        return None
    chooser = rng or random.Random()  # noqa: S311
    chosen = chooser.choice(pool)

    winner = chosen.copy()
    winner.won_rounds = [*winner.won_rounds, round_number]
    winner.win_round = round_number
    winner.won_times[round_number] = now
    winner.settle()
    return DrawResult(winner=winner, round=round_number, pool_size=len(pool))


def no_candidates_message(mode: DrawMode) -> str:
    return _NO_CANDIDATES[mode]


def revoke(guest: Guest) -> Guest:
    """Strip every win from ``guest``, returning them to all pools."""

    updated = guest.copy()
    updated.won_rounds = []
    updated.win_round = None
    updated.won_times = {}
    updated.settle()
    return updated


def remove_winner_from_round(guest: Guest, round_number: int) -> Guest:
    validate_round(round_number)
    updated = guest.copy()
    updated.won_rounds = [r for r in updated.won_rounds if r != round_number]
    updated.won_times.pop(round_number, None)
    if updated.win_round == round_number:
        updated.win_round = max(updated.won_rounds) if updated.won_rounds else None
    updated.settle()
    return updated


def clear_round(guests: Iterable[Guest], round_number: int) -> list[Guest]:
    """Drop ``round_number`` from every guest who won it; returns the changed copies."""

    validate_round(round_number)
    return [
        remove_winner_from_round(g, round_number) for g in guests if round_number in g.won_rounds
    ]


def reset_lottery(guests: Iterable[Guest]) -> list[Guest]:
    return [revoke(g) for g in guests if g.won_rounds or g.win_round is not None]
