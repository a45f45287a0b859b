"""Ports for the durable local mirror of the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rollcall.domain.model import Guest, SystemSettings


@runtime_checkable
class LocalMirror(Protocol):
    """Two keyed blobs, rewritten in full on every mutation."""

    def load_guests(self) -> list[Guest] | None:
        """Return the stored guests, or ``None`` if nothing was ever saved."""
        ...

    def load_settings(self) -> SystemSettings | None: ...

    def save_guests(self, guests: Sequence[Guest]) -> None: ...

    def save_settings(self, settings: SystemSettings) -> None: ...
