"""Merge a remote guest snapshot back into the local guest list.

Remote wins for every id it holds. Guests the snapshot lacks are kept as
they are: absence from a snapshot is never a deletion, only an explicit
delete removes a guest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rollcall.domain.model import Guest


@dataclass(slots=True)
class MergeBackResult:
    guests: list[Guest]
    replaced: int = 0
    appended: int = 0
    kept_local: int = 0

    @property
    def local_data_protection(self) -> bool:
        """The remote side was empty while local guests survived."""
        return self.replaced == 0 and self.appended == 0 and self.kept_local > 0


def merge_remote_snapshot(local: Sequence[Guest], remote: Iterable[Guest]) -> MergeBackResult:
    """Local order is kept; remote-only guests follow in snapshot order."""

    remote_by_id: dict[str, Guest] = {}
    for guest in remote:
        remote_by_id[guest.id] = guest

    merged: list[Guest] = []
    seen: set[str] = set()
    replaced = kept = 0
    for guest in local:
        incoming = remote_by_id.get(guest.id)
        if incoming is None:
            merged.append(guest.copy())
            kept += 1
        else:
            merged.append(incoming.copy())
            replaced += 1
        seen.add(guest.id)

    appended = 0
    for guest_id, guest in remote_by_id.items():
        if guest_id in seen:
            continue
        merged.append(guest.copy())
        appended += 1

    return MergeBackResult(guests=merged, replaced=replaced, appended=appended, kept_local=kept)
