"""Hook context and exceptions for the hook system.

Contains the core data structures used by the hook system:
- HookContext: Context passed to all hook callbacks
- AbortHookException: Raised by before-hooks to cancel operations
- HookResult: Result of a hook trigger operation
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


class AbortHookException(Exception):
    """Raised by before-hooks to cancel an operation.

    When raised in a before-hook, the store cancels the operation and
    raises ``OperationAbortedError`` to its caller.

    Args:
        message: Human-readable error message.

    Example:
        def reject_empty_titles(event, data, context):
            if not data["data"].get("title"):
                raise AbortHookException("Title cannot be empty")
            return data
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass
class HookContext:
    """Context passed to all hook callbacks.

    Attributes:
        store: The CMSStore that triggered the hook.
        collection_id: The collection the operation targets, if any.
        request_id: Correlation ID for logging and tracing.
    """

    store: Any  # Avoid circular import - CMSStore
    collection_id: Optional[str] = None
    request_id: str = ""

    def __post_init__(self) -> None:
        if not self.request_id:
            self.request_id = f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookResult:
    """Result of a hook trigger operation.

    Attributes:
        success: Whether all hooks executed successfully.
        aborted: Whether the operation was aborted by a hook.
        abort_message: Message from AbortHookException if aborted.
        errors: List of error messages from hooks that failed.
        data: Modified data from the hook chain.
    """

    success: bool = True
    aborted: bool = False
    abort_message: Optional[str] = None
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None
