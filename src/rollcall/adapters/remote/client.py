"""HTTP client for a REST-fronted remote document store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, cast
from urllib.parse import quote

import httpx

from rollcall.adapters.documents import (
    guest_to_payload,
    guests_from_payloads,
    settings_from_payload,
    settings_patch_payload,
    settings_to_payload,
)
from rollcall.domain.errors import ConnectivityLossError, SyncPropagationError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from rollcall.config.remote import RemoteStoreConfig
    from rollcall.domain.model import Guest, SystemSettings

log = getLogger(__name__)

GUESTS_PATH = "/guests"
SETTINGS_PATH = "/config/mainSettings"


def _default_client_factory(config: RemoteStoreConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.base_url,
        headers=config.headers,
        timeout=config.timeout_seconds,
    )


def _guest_path(guest_id: str) -> str:
    return f"{GUESTS_PATH}/{quote(guest_id, safe='')}"


@dataclass(slots=True)
class HttpDocumentStore:
    """Remote document store speaking JSON over REST.

    Reads raise :class:`ConnectivityLossError`, writes raise
    :class:`SyncPropagationError`; both wrap the underlying ``httpx`` error.
    """

    config: RemoteStoreConfig
    client_factory: Callable[[RemoteStoreConfig], httpx.AsyncClient] = field(
        default=_default_client_factory
    )

    def fetch_guests(self) -> list[Guest]:
        return asyncio.run(self._fetch_guests_async())

    def fetch_settings(self) -> SystemSettings | None:
        return asyncio.run(self._fetch_settings_async())

    def put_guests(self, guests: Sequence[Guest]) -> None:
        asyncio.run(self._put_guests_async(guests))

    def delete_guests(self, guest_ids: Sequence[str]) -> None:
        asyncio.run(self._delete_guests_async(guest_ids))

    def clear_guests(self) -> None:
        asyncio.run(self._write("DELETE", GUESTS_PATH))

    def patch_settings(self, changes: Mapping[str, object]) -> None:
        asyncio.run(self._write("PATCH", SETTINGS_PATH, json=settings_patch_payload(changes)))

    def put_settings(self, settings: SystemSettings) -> None:
        asyncio.run(self._write("PUT", SETTINGS_PATH, json=settings_to_payload(settings)))

    async def _fetch_guests_async(self) -> list[Guest]:
        payload = await self._read(GUESTS_PATH)
        if not isinstance(payload, list):
            raise ConnectivityLossError("Unexpected guest collection payload")
        return guests_from_payloads(cast(list[object], payload))

    async def _fetch_settings_async(self) -> SystemSettings | None:
        payload = await self._read(SETTINGS_PATH, missing_ok=True)
        if payload is None:
            return None
        try:
            return settings_from_payload(payload)
        except ValueError as exc:
            raise ConnectivityLossError(f"Unreadable settings document: {exc}") from exc

    async def _put_guests_async(self, guests: Sequence[Guest]) -> None:
        async with self.client_factory(self.config) as client:
            for guest in guests:
                await self._send(client, "PUT", _guest_path(guest.id), guest_to_payload(guest))

    async def _delete_guests_async(self, guest_ids: Sequence[str]) -> None:
        async with self.client_factory(self.config) as client:
            for guest_id in guest_ids:
                await self._send(client, "DELETE", _guest_path(guest_id), None, missing_ok=True)

    async def _read(self, path: str, *, missing_ok: bool = False) -> object:
        try:
            async with self.client_factory(self.config) as client:
                response = await client.get(path)
                if missing_ok and response.status_code == httpx.codes.NOT_FOUND:
                    return None
                response.raise_for_status()
                return cast(object, response.json())
        except httpx.HTTPError as exc:
            log.warning("Remote read of %s failed: %s", path, exc)
            raise ConnectivityLossError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise ConnectivityLossError(f"GET {path} returned invalid JSON") from exc

    async def _write(self, method: str, path: str, *, json: object = None) -> None:
        async with self.client_factory(self.config) as client:
            await self._send(client, method, path, json)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        json: object,
        *,
        missing_ok: bool = False,
    ) -> None:
        try:
            response = await client.request(method, path, json=json)
            if missing_ok and response.status_code == httpx.codes.NOT_FOUND:
                return
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SyncPropagationError(f"{method} {path} failed: {exc}") from exc


if TYPE_CHECKING:
    from rollcall.domain.ports import RemoteDocumentStore

    _store_check: RemoteDocumentStore = HttpDocumentStore(
        RemoteStoreConfig(base_url="http://localhost")
    )
