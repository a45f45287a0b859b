from __future__ import annotations

import random
from datetime import UTC, datetime

import pytest

from rollcall.domain import lottery
from rollcall.domain.model import DrawMode
from tests.helpers.guests import CHECK_IN_AT, make_guest

DRAWN_AT = datetime(2024, 5, 18, 21, tzinfo=UTC)


def test_draw_excludes_winners_of_the_same_round(rng: random.Random) -> None:
    guests = [
        make_guest("甲", guest_id="g1", rounds=[1], won=[1]),
        make_guest("乙", guest_id="g2", rounds=[1]),
        make_guest("丙", guest_id="g3"),
    ]

    for _ in range(20):
        result = lottery.draw(guests, DrawMode.DEFAULT, 1, now=DRAWN_AT, rng=rng)
        assert result is not None
        assert result.winner.id == "g2"
        assert result.pool_size == 1


def test_earlier_winner_returns_to_the_default_pool_next_round(rng: random.Random) -> None:
    guest = make_guest("甲", guest_id="g1", rounds=[1], won=[3])

    assert lottery.eligible_pool([guest], DrawMode.DEFAULT, 3) == []

    result = lottery.draw([guest], DrawMode.DEFAULT, 4, now=DRAWN_AT, rng=rng)

    assert result is not None
    assert result.winner.id == "g1"
    assert result.winner.won_rounds == [3, 4]
    assert result.round == 4


def test_draw_records_the_win_on_a_copy(rng: random.Random) -> None:
    guest = make_guest("甲", guest_id="g1", rounds=[1], won=[1])

    result = lottery.draw([guest], DrawMode.ALL, 2, now=DRAWN_AT, rng=rng)

    assert result is not None
    winner = result.winner
    assert winner.won_rounds == [1, 2]
    assert winner.win_round == 2
    assert winner.won_times == {1: CHECK_IN_AT, 2: DRAWN_AT}
    assert winner.is_winner
    assert guest.won_rounds == [1]


def test_winners_only_pool() -> None:
    guests = [
        make_guest("甲", guest_id="g1", rounds=[1], won=[1]),
        make_guest("乙", guest_id="g2", rounds=[1]),
        make_guest("丙", guest_id="g3", won=[2]),
    ]

    pool = lottery.eligible_pool(guests, DrawMode.WINNERS_ONLY, 2)

    assert [g.id for g in pool] == ["g1"]


def test_draw_returns_none_for_empty_pool() -> None:
    guests = [make_guest("甲", rounds=[1], won=[1])]

    assert lottery.draw(guests, DrawMode.DEFAULT, 1, now=DRAWN_AT) is None
    assert lottery.draw(guests, DrawMode.WINNERS_ONLY, 1, now=DRAWN_AT) is None


def test_draw_is_roughly_uniform() -> None:
    guests = [make_guest(str(i), guest_id=f"g{i}", rounds=[1]) for i in range(3)]
    seeded = random.Random(42)  # noqa: S311
    picks: dict[str, int] = {}

    for _ in range(3000):
        result = lottery.draw(guests, DrawMode.DEFAULT, 1, now=DRAWN_AT, rng=seeded)
        assert result is not None
        picks[result.winner.id] = picks.get(result.winner.id, 0) + 1

    assert set(picks) == {"g0", "g1", "g2"}
    assert all(800 < n < 1200 for n in picks.values())


def test_revocation_round_trip(rng: random.Random) -> None:
    guest = make_guest("甲", guest_id="g1", rounds=[1])

    drawn = lottery.draw([guest], DrawMode.DEFAULT, 1, now=DRAWN_AT, rng=rng)
    assert drawn is not None
    revoked = lottery.revoke(drawn.winner)

    assert revoked.won_rounds == []
    assert revoked.win_round is None
    assert revoked.won_times == {}
    assert not revoked.is_winner
    assert [g.id for g in lottery.eligible_pool([revoked], DrawMode.DEFAULT, 1)] == ["g1"]


def test_remove_winner_from_round_falls_back_to_latest_remaining() -> None:
    guest = make_guest("甲", won=[1, 3])

    updated = lottery.remove_winner_from_round(guest, 3)

    assert updated.won_rounds == [1]
    assert updated.win_round == 1
    assert updated.won_times == {1: CHECK_IN_AT}


def test_clear_round_only_touches_that_round() -> None:
    guests = [
        make_guest("甲", guest_id="g1", won=[1, 2]),
        make_guest("乙", guest_id="g2", won=[1]),
        make_guest("丙", guest_id="g3", won=[2]),
    ]

    cleared = lottery.clear_round(guests, 1)

    assert [(g.id, g.won_rounds) for g in cleared] == [("g1", [2]), ("g2", [])]


def test_reset_lottery_revokes_every_winner() -> None:
    guests = [make_guest("甲", won=[1]), make_guest("乙")]

    cleared = lottery.reset_lottery(guests)

    assert [g.name for g in cleared] == ["甲"]
    assert not cleared[0].is_winner


@pytest.mark.parametrize("mode", list(DrawMode))
def test_no_candidates_message_per_mode(mode: DrawMode) -> None:
    assert lottery.no_candidates_message(mode)
