"""Combining several parsed batches before anything is committed.

Multi-file uploads produce one draft batch per file. A batch that fails to
parse must not sink the others, and the same guest appearing in two files
collapses into a single draft whose signature flag is the union of both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from rollcall.domain.model import ParsedGuestDraft

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

log = logging.getLogger(__name__)

type DraftChunk = tuple[str, Callable[[], Sequence[ParsedGuestDraft]]]


@dataclass(frozen=True, slots=True)
class ChunkFailure:
    """One import source (file, image, sheet) that failed to parse."""

    label: str
    error: Exception


@dataclass(slots=True)
class BatchCollection:
    batches: list[list[ParsedGuestDraft]] = field(default_factory=list[list[ParsedGuestDraft]])
    failures: list[ChunkFailure] = field(default_factory=list[ChunkFailure])

    @property
    def partial(self) -> bool:
        return bool(self.failures) and bool(self.batches)

    def merged(self) -> list[ParsedGuestDraft]:
        return merge_draft_batches(*self.batches)


def gather_batches(chunks: Iterable[DraftChunk]) -> BatchCollection:
    """Run every chunk parser, isolating the ones that raise."""

    collection = BatchCollection()
    for label, parse in chunks:
        try:
            drafts = list(parse())
        except Exception as exc:  # noqa: BLE001
            log.warning("Import chunk %s failed: %s", label, exc, exc_info=exc)
            collection.failures.append(ChunkFailure(label=label, error=exc))
            continue
        collection.batches.append(drafts)
    return collection


def merge_draft_batches(*batches: Iterable[ParsedGuestDraft]) -> list[ParsedGuestDraft]:
    """Collapse drafts sharing a trimmed name across ``batches``.

    Order follows first appearance. Drafts without a usable name are passed
    through untouched so the normalizer can count them.
    """

    merged: list[ParsedGuestDraft] = []
    index_by_name: dict[str, int] = {}
    for batch in batches:
        for draft in batch:
            key = (draft.name or "").strip()
            if not key:
                merged.append(draft)
                continue
            position = index_by_name.get(key)
            if position is None:
                index_by_name[key] = len(merged)
                merged.append(draft)
                continue
            merged[position] = _combine(merged[position], draft)
    return merged


def _combine(existing: ParsedGuestDraft, incoming: ParsedGuestDraft) -> ParsedGuestDraft:
    return replace(
        existing,
        code=existing.code or incoming.code,
        title=existing.title or incoming.title,
        note=existing.note or incoming.note,
        category=existing.category or incoming.category,
        has_signature=existing.has_signature or incoming.has_signature,
        forced_round=(
            existing.forced_round if existing.forced_round is not None else incoming.forced_round
        ),
        source_hint=existing.source_hint or incoming.source_hint,
    )
