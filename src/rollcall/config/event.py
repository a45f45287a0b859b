"""Event defaults used when no settings have been stored yet."""

from __future__ import annotations

from typing import Final

DEFAULT_EVENT_NAME: Final[str] = "年度盛會"
DEFAULT_CHECK_IN_ROUND: Final[int] = 1
DEFAULT_LOTTERY_ROUND: Final[int] = 1
DEFAULT_TOTAL_ROUNDS: Final[int] = 2

# Upper bound on documents per remote batch write.
DEFAULT_OUTBOUND_BATCH_SIZE: Final[int] = 450
