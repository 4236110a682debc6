"""Exceptions raised by the in-memory store.

Not-found outcomes are never raised: store operations return ``None`` or
``False`` instead. These exceptions cover hook vetoes and broken
invariants only.
"""


class StoreError(Exception):
    """Base class for all store errors."""


class OperationAbortedError(StoreError):
    """Raised when a before-hook vetoes an item create or update."""

    def __init__(self, event: str, message: str) -> None:
        self.event = event
        self.message = message
        super().__init__(f"{event} aborted: {message}")


class HookExecutionError(StoreError):
    """Raised when a stop-on-error hook (such as a consistency hook) fails."""

    def __init__(self, event: str, errors: list[str]) -> None:
        self.event = event
        self.errors = errors
        super().__init__(f"{event} hooks failed: {'; '.join(errors)}")


class ConsistencyError(StoreError):
    """Raised by a consistency hook that finds an invariant violated."""
