from __future__ import annotations

from typing import TYPE_CHECKING

from rollcall.adapters.sqlalchemy import GUESTS_KEY, SETTINGS_KEY, SqlAlchemyLocalMirror
from rollcall.domain.model import SystemSettings
from rollcall.domain.ports import LocalMirror
from tests.helpers.guests import make_guest

if TYPE_CHECKING:
    from collections.abc import Callable

    import pytest

    from rollcall.adapters.sqlalchemy import SqlAlchemyUnitOfWork


def test_empty_mirror_loads_nothing(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    mirror = SqlAlchemyLocalMirror(sqlite_unit_of_work)

    assert isinstance(mirror, LocalMirror)
    assert mirror.load_guests() is None
    assert mirror.load_settings() is None


def test_mirror_round_trips_guests_and_settings(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    mirror = SqlAlchemyLocalMirror(sqlite_unit_of_work)
    guests = [
        make_guest("陳大文", guest_id="g1", rounds=[1], won=[2], introduced=True),
        make_guest("林小華", guest_id="g2"),
    ]
    settings = SystemSettings(event_name="春酒", current_check_in_round=2)

    mirror.save_guests(guests)
    mirror.save_settings(settings)

    assert mirror.load_guests() == guests
    assert mirror.load_settings() == settings


def test_saves_rewrite_the_whole_blob(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    mirror = SqlAlchemyLocalMirror(sqlite_unit_of_work)

    mirror.save_guests([make_guest("甲", guest_id="g1"), make_guest("乙", guest_id="g2")])
    mirror.save_guests([make_guest("乙", guest_id="g2")])

    loaded = mirror.load_guests()
    assert loaded is not None
    assert [g.id for g in loaded] == ["g2"]


def test_stored_json_keeps_cjk_text(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    mirror = SqlAlchemyLocalMirror(sqlite_unit_of_work)
    mirror.save_guests([make_guest("陳大文", guest_id="g1")])

    with sqlite_unit_of_work() as uow:
        raw = uow.blobs.get(GUESTS_KEY)

    assert raw is not None
    assert "陳大文" in raw
    assert '"attendedRounds":[]' in raw


def test_corrupt_blobs_are_ignored(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.blobs.put(GUESTS_KEY, "{not json")
        uow.blobs.put(SETTINGS_KEY, '{"currentCheckInRound": 0}')
        uow.commit()
    mirror = SqlAlchemyLocalMirror(sqlite_unit_of_work)

    assert mirror.load_guests() is None
    assert mirror.load_settings() is None
    assert "undecodable" in caplog.text
    assert "malformed" in caplog.text
