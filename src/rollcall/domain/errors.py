"""Domain error types."""

from __future__ import annotations


class GuestNotFoundError(LookupError):
    """Raised when an operation addresses a guest id the registry does not hold."""

    def __init__(self, guest_id: str) -> None:
        super().__init__(f"Unknown guest id: {guest_id}")
        self.guest_id = guest_id


class InvalidRoundError(ValueError):
    """Raised when a round number is not a positive integer."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Round numbers must be positive integers, got {value!r}")
        self.value = value


class RemoteStoreError(RuntimeError):
    """Base class for failures talking to the remote document store."""


class SyncPropagationError(RemoteStoreError):
    """A write or delete against the remote store did not go through."""


class ConnectivityLossError(RemoteStoreError):
    """Reading or subscribing to remote snapshots failed."""


def validate_round(value: object) -> int:
    # bool is an int subclass; True is not a round
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidRoundError(value)
    return value
