"""Local mirror storing the registry as two JSON blobs in SQLite."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from rollcall.adapters.documents import (
    guest_to_payload,
    guests_from_payloads,
    settings_from_payload,
    settings_to_payload,
)
from rollcall.adapters.sqlalchemy.mappings import GUESTS_KEY, SETTINGS_KEY
from rollcall.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from rollcall.domain.model import Guest, SystemSettings

log = logging.getLogger(__name__)


class SqlAlchemyLocalMirror:
    def __init__(
        self,
        unit_of_work_factory: Callable[[], SqlAlchemyUnitOfWork] = SqlAlchemyUnitOfWork,
    ) -> None:
        self._uow_factory = unit_of_work_factory

    def load_guests(self) -> list[Guest] | None:
        raw = self._read(GUESTS_KEY)
        if raw is None:
            return None
        if not isinstance(raw, list):
            log.warning("Ignoring malformed %s blob", GUESTS_KEY)
            return None
        return guests_from_payloads(cast(list[object], raw))

    def load_settings(self) -> SystemSettings | None:
        raw = self._read(SETTINGS_KEY)
        if raw is None:
            return None
        try:
            return settings_from_payload(raw)
        except (ValidationError, ValueError) as exc:
            log.warning("Ignoring malformed %s blob: %s", SETTINGS_KEY, exc)
            return None

    def save_guests(self, guests: Sequence[Guest]) -> None:
        self._write(GUESTS_KEY, [guest_to_payload(guest) for guest in guests])

    def save_settings(self, settings: SystemSettings) -> None:
        self._write(SETTINGS_KEY, settings_to_payload(settings))

    def _read(self, key: str) -> object | None:
        with self._uow_factory() as uow:
            payload = uow.blobs.get(key)
        if payload is None:
            return None
        try:
            return cast(object, json.loads(payload))
        except json.JSONDecodeError:
            log.warning("Ignoring undecodable %s blob", key)
            return None

    def _write(self, key: str, document: object) -> None:
        encoded = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        with self._uow_factory() as uow:
            uow.blobs.put(key, encoded)
            uow.commit()


if TYPE_CHECKING:
    from rollcall.domain.ports import LocalMirror

    _mirror_check: LocalMirror = SqlAlchemyLocalMirror()
