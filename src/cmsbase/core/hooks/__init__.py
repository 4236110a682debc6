"""Hook system core module.

Hooks let embedders observe or veto store mutations. The store's own
consistency rules run on a separate internal registry before any user
hook fires.

Example usage:
    from cmsbase.core.hooks import HookEvent

    def log_new_item(event, data, context):
        print(data["item"].id)

    store.hooks.register(
        HookEvent.ON_ITEM_AFTER_CREATE,
        log_new_item,
        filters={"collection": "col_players"},
    )
"""

from cmsbase.core.hooks.hook_events import HookEvent
from cmsbase.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookRegistry",
    "RegisteredHook",
    "HookEvent",
]
