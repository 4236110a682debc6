"""Hook event definitions.

This module defines all hook events that the store fires.

IMPORTANT: Adding new events is allowed (non-breaking), but
           removing or renaming events is a breaking change.
"""


class HookEvent:
    """Hook event names.

    Each event follows a consistent naming pattern:
    - before_* events can modify data or abort the operation
    - after_* events are called once the mutation is committed

    After-events receive live store entities in their data mapping.
    """

    # Collection Operations (schema changes)
    ON_COLLECTION_AFTER_CREATE = "on_collection_after_create"
    ON_COLLECTION_AFTER_UPDATE = "on_collection_after_update"
    ON_COLLECTION_AFTER_DELETE = "on_collection_after_delete"

    # Field Operations
    ON_FIELD_AFTER_CREATE = "on_field_after_create"
    ON_FIELD_AFTER_UPDATE = "on_field_after_update"
    ON_FIELD_AFTER_DELETE = "on_field_after_delete"

    # Item Operations
    ON_ITEM_BEFORE_CREATE = "on_item_before_create"
    ON_ITEM_AFTER_CREATE = "on_item_after_create"
    ON_ITEM_BEFORE_UPDATE = "on_item_before_update"
    ON_ITEM_AFTER_UPDATE = "on_item_after_update"
    ON_ITEM_AFTER_DELETE = "on_item_after_delete"
