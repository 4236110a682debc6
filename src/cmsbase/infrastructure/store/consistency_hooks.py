"""Built-in consistency hooks for the store.

These hooks keep the schema model and the record store coherent and
CANNOT be unregistered. The store registers them on its own internal
registry and triggers it before the user registry, so user hooks already
observe the updated counts and timestamps and can never skip a rule.

- item_count_hook: recomputes item_count and refreshes updated_at after
  an item is created or deleted
- cascade_hook: checks that a deleted collection left no items behind
- field_prune_hook: removes data keys that no longer match a field
- collection_timestamp_hook: stamps updated_at on schema mutations
"""

from typing import Any, Optional

from cmsbase.core.hooks.hook_events import HookEvent
from cmsbase.core.hooks.hook_registry import HookRegistry
from cmsbase.core.logging import get_logger
from cmsbase.domain.entities.hook_context import HookContext
from cmsbase.infrastructure.store.exceptions import ConsistencyError

logger = get_logger(__name__)


def item_count_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Recompute the owning collection's item_count from the item index.

    Items pointing at an unknown collection carry no bookkeeping.
    """
    if data is None or data.get("collection") is None:
        return data

    collection = data["collection"]
    collection.item_count = len(data["owned_item_ids"])
    collection.updated_at = data["timestamp"]
    logger.debug(
        "Item count hook: Recomputed item count",
        collection_id=collection.id,
        item_count=collection.item_count,
    )
    return data


def cascade_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Verify that no item still references a deleted collection."""
    if data is None or context is None:
        return data

    collection = data["collection"]
    remaining = context.store.count_items(collection.id)
    if remaining:
        raise ConsistencyError(
            f"Collection {collection.id} deleted with {remaining} orphaned items"
        )
    logger.debug(
        "Cascade hook: No orphaned items",
        collection_id=collection.id,
        items_deleted=len(data.get("deleted_item_ids", [])),
    )
    return data


def field_prune_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Drop every item data key that no remaining field uses."""
    if data is None:
        return data

    live_keys = set(data["collection"].field_keys)
    pruned = 0
    for item in data["items"]:
        for key in [k for k in item.data if k not in live_keys]:
            del item.data[key]
            pruned += 1

    logger.debug(
        "Field prune hook: Removed orphaned keys",
        collection_id=data["collection"].id,
        field_key=data["field"].key,
        keys_pruned=pruned,
    )
    return data


def collection_timestamp_hook(
    event: str,
    data: Optional[dict[str, Any]],
    context: Optional[HookContext],
) -> Optional[dict[str, Any]]:
    """Stamp updated_at on the collection touched by a schema mutation."""
    if data is None:
        return data

    data["collection"].updated_at = data["timestamp"]
    return data


def register_consistency_hooks(registry: HookRegistry) -> list[str]:
    """Register all consistency hooks.

    Args:
        registry: The HookRegistry to register hooks with.

    Returns:
        List of registered hook IDs.
    """
    registrations = [
        (HookEvent.ON_ITEM_AFTER_CREATE, item_count_hook),
        (HookEvent.ON_ITEM_AFTER_DELETE, item_count_hook),
        (HookEvent.ON_COLLECTION_AFTER_DELETE, cascade_hook),
        (HookEvent.ON_FIELD_AFTER_DELETE, field_prune_hook),
        (HookEvent.ON_COLLECTION_AFTER_UPDATE, collection_timestamp_hook),
        (HookEvent.ON_FIELD_AFTER_CREATE, collection_timestamp_hook),
        (HookEvent.ON_FIELD_AFTER_UPDATE, collection_timestamp_hook),
        (HookEvent.ON_FIELD_AFTER_DELETE, collection_timestamp_hook),
    ]

    hook_ids = [
        registry.register(
            event=event,
            callback=callback,
            stop_on_error=True,
            is_builtin=True,
        )
        for event, callback in registrations
    ]

    logger.debug("Consistency hooks registered", count=len(hook_ids))
    return hook_ids
