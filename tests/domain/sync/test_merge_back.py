from __future__ import annotations

from rollcall.domain.sync import merge_remote_snapshot
from tests.helpers.guests import make_guest


def test_remote_wins_for_shared_ids_and_local_only_guests_survive() -> None:
    local = [make_guest("甲", guest_id="g1"), make_guest("乙", guest_id="g2")]
    remote = [make_guest("甲", guest_id="g1", rounds=[2]), make_guest("丙", guest_id="g3")]

    result = merge_remote_snapshot(local, remote)

    assert [g.id for g in result.guests] == ["g1", "g2", "g3"]
    assert result.guests[0].attended_rounds == [2]
    assert (result.replaced, result.kept_local, result.appended) == (1, 1, 1)
    assert not result.local_data_protection


def test_absence_from_snapshot_is_not_deletion() -> None:
    local = [make_guest("甲", guest_id="g1", rounds=[1])]

    result = merge_remote_snapshot(local, [])

    assert result.guests == local
    assert result.local_data_protection


def test_merge_is_idempotent() -> None:
    local = [make_guest("甲", guest_id="g1"), make_guest("乙", guest_id="g2")]
    remote = [make_guest("甲", guest_id="g1", won=[1]), make_guest("丙", guest_id="g3")]

    once = merge_remote_snapshot(local, remote)
    twice = merge_remote_snapshot(once.guests, remote)

    assert twice.guests == once.guests


def test_merge_returns_detached_copies() -> None:
    local = [make_guest("甲", guest_id="g1")]
    remote = [make_guest("乙", guest_id="g2")]

    result = merge_remote_snapshot(local, remote)
    result.guests[0].attended_rounds.append(1)
    result.guests[1].attended_rounds.append(1)

    assert local[0].attended_rounds == []
    assert remote[0].attended_rounds == []


def test_empty_local_and_remote_is_not_protection() -> None:
    assert not merge_remote_snapshot([], []).local_data_protection
