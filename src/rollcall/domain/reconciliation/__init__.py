"""Reconciliation of imported guest drafts into the guest list.

Layered flow:
1) gather draft batches from import sources, isolating failed chunks
2) merge batches that mention the same guest before commit
3) normalize drafts (names, header rows, categories)
4) merge drafts into the current guest list by name
"""

from __future__ import annotations

from .batches import BatchCollection, ChunkFailure, gather_batches, merge_draft_batches
from .categories import CATEGORY_RULES, infer_category, resolve_category
from .engine import ImportStatus, ReconciliationResult, merge_drafts
from .normalize import HEADER_TOKENS, NormalizationResult, normalize_draft, normalize_drafts

__all__ = [
    "CATEGORY_RULES",
    "HEADER_TOKENS",
    "BatchCollection",
    "ChunkFailure",
    "ImportStatus",
    "NormalizationResult",
    "ReconciliationResult",
    "gather_batches",
    "infer_category",
    "merge_draft_batches",
    "merge_drafts",
    "normalize_draft",
    "normalize_drafts",
    "resolve_category",
]
