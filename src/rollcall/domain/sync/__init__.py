"""Keeping the local registry and the remote document store in step."""

from __future__ import annotations

from .merge_back import MergeBackResult, merge_remote_snapshot
from .outbound import ConnectivityStatus, OutboundMirror

__all__ = [
    "ConnectivityStatus",
    "MergeBackResult",
    "OutboundMirror",
    "merge_remote_snapshot",
]
