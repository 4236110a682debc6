"""In-memory schema and record store.

The store owns two id-keyed tables (collections and items) plus an index
of item ids per collection id. Every read returns a snapshot copy so that
callers can never mutate store state behind its back. Mutations fire hook
events; the built-in consistency hooks keep item counts, timestamps and
item data coherent with the schema.

Not-found outcomes are reported with ``None`` (for reads and updates) or
``False`` (for deletes), never with exceptions.
"""

import copy
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Union

from cmsbase.core.config import Settings, get_settings
from cmsbase.core.hooks import HookEvent, HookRegistry
from cmsbase.core.logging import get_logger
from cmsbase.domain.entities import (
    CMSStats,
    Collection,
    Field,
    HookContext,
    Item,
    Scalar,
    utc_now,
)
from cmsbase.domain.services.id_generator import IdGenerator
from cmsbase.domain.services.stats_service import StatsService
from cmsbase.domain.services.value_coercer import ValueCoercer
from cmsbase.infrastructure.store.consistency_hooks import register_consistency_hooks
from cmsbase.infrastructure.store.exceptions import HookExecutionError, OperationAbortedError
from cmsbase.infrastructure.store.seed_data import (
    SEED_COLLECTIONS,
    SEED_ITEMS,
    SEED_UPDATED_AT,
)

logger = get_logger(__name__)

FieldDefinition = Union[Field, Mapping[str, Any]]


class CMSStore:
    """Memory-resident store of collections and their items.

    Example:
        store = CMSStore(seed=False)
        posts = store.create_collection(
            "Posts", "posts", [{"name": "Title", "key": "title", "type": "text"}]
        )
        store.create_item(posts.id, {"title": "Hello"})
        assert store.get_collection(posts.id).item_count == 1
    """

    def __init__(
        self,
        hooks: Optional[HookRegistry] = None,
        clock: Optional[Callable[[], str]] = None,
        settings: Optional[Settings] = None,
        seed: Optional[bool] = None,
    ) -> None:
        """Initialize the store.

        Args:
            hooks: Registry of user hooks. A new one is created when
                omitted. Consistency hooks live on a separate internal
                registry and always run first.
            clock: Returns the current ISO-8601 timestamp.
            settings: Application settings.
            seed: Load the example dataset. Defaults to the
                ``seed_on_startup`` setting.
        """
        self.settings = settings or get_settings()
        self.hooks = hooks or HookRegistry()
        self.clock = clock or utc_now

        self._collections: dict[str, Collection] = {}
        self._items: dict[str, Item] = {}
        self._items_by_collection: dict[str, list[str]] = {}

        self._consistency = HookRegistry()
        register_consistency_hooks(self._consistency)

        if seed if seed is not None else self.settings.seed_on_startup:
            self._load_seed_data()

    @classmethod
    def seeded(cls, **kwargs: Any) -> "CMSStore":
        """Create a store loaded with the example dataset."""
        return cls(seed=True, **kwargs)

    # Collections

    def get_collections(self) -> list[Collection]:
        """All collections in insertion order."""
        return [copy.deepcopy(c) for c in self._collections.values()]

    def get_collection(self, collection_id: str) -> Optional[Collection]:
        collection = self._collections.get(collection_id)
        return copy.deepcopy(collection) if collection else None

    def create_collection(
        self, name: str, slug: str, fields: Sequence[FieldDefinition] = ()
    ) -> Collection:
        """Create a collection.

        Every field gets a fresh id; ids carried by the definitions are
        discarded. Names and slugs are not checked for uniqueness.

        Args:
            name: Collection name.
            slug: URL-safe identifier.
            fields: Ordered field definitions (mappings or Field instances).

        Returns:
            Snapshot of the created collection.

        Raises:
            ValueError: If a field definition has an unknown type.
        """
        now = self.clock()
        collection = Collection(
            id=self._new_id(IdGenerator.collection_id, self._collections, self._items_by_collection),
            name=name,
            slug=slug,
            fields=self._build_fields(fields),
            item_count=0,
            created_at=now,
            updated_at=now,
        )
        self._collections[collection.id] = collection
        self._items_by_collection.setdefault(collection.id, [])

        self._fire(
            HookEvent.ON_COLLECTION_AFTER_CREATE,
            {"collection": collection, "timestamp": now},
            collection.id,
        )

        logger.info(
            "Collection created",
            collection_id=collection.id,
            collection_name=name,
            slug=slug,
            field_count=len(collection.fields),
        )
        return copy.deepcopy(collection)

    def update_collection(
        self,
        collection_id: str,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        fields: Optional[Sequence[FieldDefinition]] = None,
    ) -> Optional[Collection]:
        """Merge attributes into a collection.

        ``fields`` replaces the whole field list and every field in it is
        assigned a fresh id. Existing item data is left untouched.

        Returns:
            Snapshot of the updated collection, or None if not found.
        """
        collection = self._collections.get(collection_id)
        if collection is None:
            logger.warning("Collection not found for update", collection_id=collection_id)
            return None

        # Build fields first so an invalid definition leaves the collection untouched
        new_fields = self._build_fields(fields) if fields is not None else None

        changed = []
        if name is not None:
            collection.name = name
            changed.append("name")
        if slug is not None:
            collection.slug = slug
            changed.append("slug")
        if new_fields is not None:
            collection.fields = new_fields
            changed.append("fields")

        self._fire(
            HookEvent.ON_COLLECTION_AFTER_UPDATE,
            {"collection": collection, "changed": changed, "timestamp": self.clock()},
            collection_id,
        )

        logger.info("Collection updated", collection_id=collection_id, changed=changed)
        return copy.deepcopy(collection)

    def delete_collection(self, collection_id: str) -> bool:
        """Delete a collection and every item it owns.

        Returns:
            True if deleted, False if not found.
        """
        collection = self._collections.pop(collection_id, None)
        if collection is None:
            logger.warning("Collection not found for delete", collection_id=collection_id)
            return False

        deleted_item_ids = self._items_by_collection.pop(collection_id, [])
        for item_id in deleted_item_ids:
            del self._items[item_id]

        self._fire(
            HookEvent.ON_COLLECTION_AFTER_DELETE,
            {"collection": collection, "deleted_item_ids": deleted_item_ids, "timestamp": self.clock()},
            collection_id,
        )

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            collection_name=collection.name,
            items_deleted=len(deleted_item_ids),
        )
        return True

    # Fields

    def add_field_to_collection(
        self, collection_id: str, field: FieldDefinition
    ) -> Optional[Field]:
        """Append a field with a fresh id.

        Returns:
            Snapshot of the new field, or None if the collection is not found.
        """
        collection = self._collections.get(collection_id)
        if collection is None:
            logger.warning("Collection not found for field add", collection_id=collection_id)
            return None

        new_field = Field.from_definition(field, self._new_field_id(collection))
        collection.fields.append(new_field)

        self._fire(
            HookEvent.ON_FIELD_AFTER_CREATE,
            {"collection": collection, "field": new_field, "timestamp": self.clock()},
            collection_id,
        )

        logger.info(
            "Field added",
            collection_id=collection_id,
            field_id=new_field.id,
            field_key=new_field.key,
        )
        return copy.deepcopy(new_field)

    def update_field(
        self, collection_id: str, field_id: str, changes: Mapping[str, Any]
    ) -> Optional[Field]:
        """Merge ``changes`` into a field, preserving its id.

        Returns:
            Snapshot of the updated field, or None if the collection or
            the field is not found.
        """
        collection = self._collections.get(collection_id)
        existing = collection.get_field(field_id) if collection else None
        if collection is None or existing is None:
            logger.warning(
                "Field not found for update",
                collection_id=collection_id,
                field_id=field_id,
            )
            return None

        updated = existing.merged(changes)
        collection.fields[collection.fields.index(existing)] = updated

        self._fire(
            HookEvent.ON_FIELD_AFTER_UPDATE,
            {"collection": collection, "field": updated, "previous": existing, "timestamp": self.clock()},
            collection_id,
        )

        logger.info("Field updated", collection_id=collection_id, field_id=field_id)
        return copy.deepcopy(updated)

    def delete_field(self, collection_id: str, field_id: str) -> bool:
        """Remove a field and prune orphaned keys from the collection's items.

        Returns:
            True if deleted, False if the collection or field is not found.
        """
        collection = self._collections.get(collection_id)
        existing = collection.get_field(field_id) if collection else None
        if collection is None or existing is None:
            logger.warning(
                "Field not found for delete",
                collection_id=collection_id,
                field_id=field_id,
            )
            return False

        collection.fields.remove(existing)

        self._fire(
            HookEvent.ON_FIELD_AFTER_DELETE,
            {
                "collection": collection,
                "field": existing,
                "items": self._owned_items(collection_id),
                "timestamp": self.clock(),
            },
            collection_id,
        )

        logger.info(
            "Field deleted",
            collection_id=collection_id,
            field_id=field_id,
            field_key=existing.key,
        )
        return True

    # Items

    def get_items(self, collection_id: str) -> list[Item]:
        """Items owned by a collection, in insertion order."""
        return [copy.deepcopy(item) for item in self._owned_items(collection_id)]

    def get_item(self, item_id: str) -> Optional[Item]:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item else None

    def count_items(self, collection_id: str) -> int:
        return len(self._items_by_collection.get(collection_id, []))

    def create_item(self, collection_id: str, data: Mapping[str, Scalar]) -> Item:
        """Create an item.

        The data is not validated against the collection's fields. An
        unknown ``collection_id`` is accepted (ownership is a weak
        reference) but no collection bookkeeping happens.

        Returns:
            Snapshot of the created item.

        Raises:
            OperationAbortedError: If a before-create hook vetoes the item.
        """
        payload = self._run_before_hooks(
            HookEvent.ON_ITEM_BEFORE_CREATE,
            {"collection_id": collection_id, "data": dict(data)},
            collection_id,
        )

        now = self.clock()
        item = Item(
            id=self._new_id(IdGenerator.item_id, self._items),
            collection_id=collection_id,
            data=dict(payload["data"]),
            created_at=now,
            updated_at=now,
        )
        self._items[item.id] = item
        owned = self._items_by_collection.setdefault(collection_id, [])
        owned.append(item.id)

        self._fire(
            HookEvent.ON_ITEM_AFTER_CREATE,
            {
                "item": item,
                "collection": self._collections.get(collection_id),
                "owned_item_ids": owned,
                "timestamp": now,
            },
            collection_id,
        )

        logger.debug("Item created", item_id=item.id, collection_id=collection_id)
        return copy.deepcopy(item)

    def update_item(self, item_id: str, data: Mapping[str, Scalar]) -> Optional[Item]:
        """Replace an item's data map (no merge).

        Returns:
            Snapshot of the updated item, or None if not found.

        Raises:
            OperationAbortedError: If a before-update hook vetoes the change.
        """
        item = self._items.get(item_id)
        if item is None:
            logger.warning("Item not found for update", item_id=item_id)
            return None

        payload = self._run_before_hooks(
            HookEvent.ON_ITEM_BEFORE_UPDATE,
            {"item_id": item_id, "collection_id": item.collection_id, "data": dict(data)},
            item.collection_id,
        )

        item.data = dict(payload["data"])
        item.updated_at = self.clock()

        self._fire(
            HookEvent.ON_ITEM_AFTER_UPDATE,
            {"item": item, "timestamp": item.updated_at},
            item.collection_id,
        )

        logger.debug("Item updated", item_id=item_id, collection_id=item.collection_id)
        return copy.deepcopy(item)

    def delete_item(self, item_id: str) -> bool:
        """Delete an item and refresh its collection's bookkeeping.

        Returns:
            True if deleted, False if not found.
        """
        item = self._items.pop(item_id, None)
        if item is None:
            logger.warning("Item not found for delete", item_id=item_id)
            return False

        owned = self._items_by_collection.setdefault(item.collection_id, [])
        owned.remove(item_id)

        self._fire(
            HookEvent.ON_ITEM_AFTER_DELETE,
            {
                "item": item,
                "collection": self._collections.get(item.collection_id),
                "owned_item_ids": owned,
                "timestamp": self.clock(),
            },
            item.collection_id,
        )

        logger.debug("Item deleted", item_id=item_id, collection_id=item.collection_id)
        return True

    def new_item_defaults(self, collection_id: str) -> Optional[dict[str, Scalar]]:
        """Data for a blank item: each field's default value or type default."""
        collection = self._collections.get(collection_id)
        if collection is None:
            logger.warning("Collection not found for item defaults", collection_id=collection_id)
            return None
        return ValueCoercer.defaults_for(collection.fields)

    # Stats

    def get_cms_stats(self) -> CMSStats:
        return StatsService(self, self.settings).get_cms_stats()

    # Internals

    def _owned_items(self, collection_id: str) -> list[Item]:
        return [self._items[i] for i in self._items_by_collection.get(collection_id, [])]

    def _build_fields(self, definitions: Sequence[FieldDefinition]) -> list[Field]:
        fields: list[Field] = []
        for definition in definitions:
            taken = {f.id for f in fields}
            field_id = self._new_id(IdGenerator.field_id, taken)
            fields.append(Field.from_definition(definition, field_id))
        return fields

    def _new_field_id(self, collection: Collection) -> str:
        return self._new_id(IdGenerator.field_id, {f.id for f in collection.fields})

    def _new_id(self, factory: Callable[[int], str], *taken: Any) -> str:
        """Draw ids from ``factory`` until one is absent from every ``taken`` container."""
        while True:
            candidate = factory(self.settings.id_length)
            if not any(candidate in container for container in taken):
                return candidate

    def _context(self, collection_id: Optional[str]) -> HookContext:
        return HookContext(store=self, collection_id=collection_id)

    def _fire(self, event: str, data: dict[str, Any], collection_id: Optional[str]) -> None:
        """Apply the consistency rules, then notify user hooks.

        The mutation is already committed, so a user hook that aborts or
        fails is logged and never raised.

        Raises:
            HookExecutionError: If a consistency rule failed.
        """
        context = self._context(collection_id)
        applied = self._consistency.trigger(event=event, data=data, context=context)
        if not applied.success:
            raise HookExecutionError(event, applied.errors)

        result = self.hooks.trigger(
            event=event,
            data=data,
            context=context,
            filters={"collection": collection_id} if collection_id else None,
        )
        if result.aborted:
            logger.warning(
                "Abort ignored for committed mutation",
                hook_event=event,
                reason=result.abort_message,
            )
        elif not result.success:
            logger.warning("After-event hooks failed", hook_event=event, errors=result.errors)

    def _run_before_hooks(
        self, event: str, data: dict[str, Any], collection_id: Optional[str]
    ) -> dict[str, Any]:
        """Trigger before-event hooks and return the (possibly rewritten) data."""
        result = self.hooks.trigger(
            event=event,
            data=data,
            context=self._context(collection_id),
            filters={"collection": collection_id} if collection_id else None,
        )
        if result.aborted:
            raise OperationAbortedError(event, result.abort_message or "")
        if not result.success:
            raise HookExecutionError(event, result.errors)
        if result.data is None or not isinstance(result.data.get("data"), Mapping):
            raise HookExecutionError(event, ["hook returned data without a 'data' mapping"])
        return result.data

    def _load_seed_data(self) -> None:
        """Insert the example dataset without firing hooks.

        Seed ids and timestamps are kept verbatim; item counts are derived.
        """
        for definition in SEED_COLLECTIONS:
            collection = Collection(
                id=definition["id"],
                name=definition["name"],
                slug=definition["slug"],
                fields=[Field.from_definition(f, f["id"]) for f in definition["fields"]],
                created_at=definition["created_at"],
                updated_at=SEED_UPDATED_AT,
            )
            self._collections[collection.id] = collection
            self._items_by_collection[collection.id] = []

        for definition in SEED_ITEMS:
            item = Item(
                id=definition["id"],
                collection_id=definition["collection_id"],
                data=copy.deepcopy(definition["data"]),
                created_at=definition["created_at"],
                updated_at=SEED_UPDATED_AT,
            )
            self._items[item.id] = item
            self._items_by_collection.setdefault(item.collection_id, []).append(item.id)

        for collection in self._collections.values():
            collection.item_count = self.count_items(collection.id)

        logger.debug(
            "Seed data loaded",
            collections=len(self._collections),
            items=len(self._items),
        )
