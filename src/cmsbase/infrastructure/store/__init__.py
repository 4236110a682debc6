"""In-memory store and its consistency hooks."""

from cmsbase.infrastructure.store.exceptions import (
    ConsistencyError,
    HookExecutionError,
    OperationAbortedError,
    StoreError,
)
from cmsbase.infrastructure.store.memory_store import CMSStore

__all__ = [
    "CMSStore",
    "ConsistencyError",
    "HookExecutionError",
    "OperationAbortedError",
    "StoreError",
]
