"""Unit tests for the built-in consistency hooks."""

import pytest

from cmsbase.core.hooks import HookEvent, HookRegistry
from cmsbase.domain.entities import Collection, Field, HookContext, Item
from cmsbase.infrastructure.store.consistency_hooks import (
    cascade_hook,
    collection_timestamp_hook,
    field_prune_hook,
    item_count_hook,
    register_consistency_hooks,
)
from cmsbase.infrastructure.store.exceptions import ConsistencyError


def make_collection(**overrides) -> Collection:
    attributes = {
        "id": "col_posts",
        "name": "Posts",
        "slug": "posts",
        "fields": [Field(id="f1", name="Title", key="title")],
        "created_at": "2025-01-01T00:00:00.000Z",
        "updated_at": "2025-01-01T00:00:00.000Z",
    }
    attributes.update(overrides)
    return Collection(**attributes)


class StubStore:
    """Store stand-in reporting a fixed number of remaining items."""

    def __init__(self, remaining: int = 0) -> None:
        self.remaining = remaining

    def count_items(self, collection_id: str) -> int:
        return self.remaining


class TestItemCountHook:
    """Tests for the item_count_hook."""

    def test_sets_count_from_index(self) -> None:
        collection = make_collection()
        data = {
            "collection": collection,
            "owned_item_ids": ["item_a", "item_b"],
            "timestamp": "2025-02-01T00:00:00.000Z",
        }

        result = item_count_hook(HookEvent.ON_ITEM_AFTER_CREATE, data, None)

        assert result is data
        assert collection.item_count == 2
        assert collection.updated_at == "2025-02-01T00:00:00.000Z"

    def test_ignores_unknown_collection(self) -> None:
        data = {"collection": None, "owned_item_ids": ["item_a"], "timestamp": "x"}

        assert item_count_hook(HookEvent.ON_ITEM_AFTER_CREATE, data, None) is data


class TestCascadeHook:
    """Tests for the cascade_hook."""

    def test_passes_when_no_items_remain(self) -> None:
        data = {"collection": make_collection(), "deleted_item_ids": ["item_a"]}
        context = HookContext(store=StubStore(remaining=0))

        assert cascade_hook(HookEvent.ON_COLLECTION_AFTER_DELETE, data, context) is data

    def test_raises_on_orphaned_items(self) -> None:
        data = {"collection": make_collection(), "deleted_item_ids": []}
        context = HookContext(store=StubStore(remaining=3))

        with pytest.raises(ConsistencyError, match="3 orphaned items"):
            cascade_hook(HookEvent.ON_COLLECTION_AFTER_DELETE, data, context)


class TestFieldPruneHook:
    """Tests for the field_prune_hook."""

    def test_removes_keys_without_field(self) -> None:
        collection = make_collection()
        items = [
            Item(id="item_a", collection_id="col_posts", data={"title": "A", "body": "gone"}),
            Item(id="item_b", collection_id="col_posts", data={"legacy": 1}),
        ]
        data = {
            "collection": collection,
            "field": Field(id="f2", name="Body", key="body"),
            "items": items,
        }

        field_prune_hook(HookEvent.ON_FIELD_AFTER_DELETE, data, None)

        assert items[0].data == {"title": "A"}
        assert items[1].data == {}


class TestCollectionTimestampHook:
    def test_stamps_updated_at(self) -> None:
        collection = make_collection()

        collection_timestamp_hook(
            HookEvent.ON_FIELD_AFTER_CREATE,
            {"collection": collection, "timestamp": "2025-03-01T00:00:00.000Z"},
            None,
        )

        assert collection.updated_at == "2025-03-01T00:00:00.000Z"
        assert collection.created_at == "2025-01-01T00:00:00.000Z"


class TestRegisterConsistencyHooks:
    """Tests for register_consistency_hooks."""

    def test_registers_builtin_hooks(self) -> None:
        registry = HookRegistry()

        hook_ids = register_consistency_hooks(registry)

        assert len(hook_ids) == 8
        assert all(registry.unregister(hook_id) is False for hook_id in hook_ids)

    def test_field_delete_runs_prune_and_timestamp(self) -> None:
        registry = HookRegistry()
        register_consistency_hooks(registry)
        collection = make_collection()
        item = Item(id="item_a", collection_id="col_posts", data={"title": "A", "body": "gone"})

        result = registry.trigger(
            HookEvent.ON_FIELD_AFTER_DELETE,
            data={
                "collection": collection,
                "field": Field(id="f2", name="Body", key="body"),
                "items": [item],
                "timestamp": "2025-03-01T00:00:00.000Z",
            },
        )

        assert result.success is True
        assert item.data == {"title": "A"}
        assert collection.updated_at == "2025-03-01T00:00:00.000Z"

    def test_failing_rule_fails_trigger(self) -> None:
        """Test that a broken invariant is reported as an unsuccessful trigger."""
        registry = HookRegistry()
        register_consistency_hooks(registry)

        result = registry.trigger(
            HookEvent.ON_COLLECTION_AFTER_DELETE,
            data={"collection": make_collection(), "deleted_item_ids": []},
            context=HookContext(store=StubStore(remaining=1)),
        )

        assert result.success is False
        assert "orphaned" in result.errors[0]
