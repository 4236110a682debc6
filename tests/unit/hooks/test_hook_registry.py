"""Unit tests for the hook system infrastructure.

Tests cover:
- Hook registration and unregistration
- Priority ordering
- Tag-based filtering
- AbortHookException handling
- Error handling
"""

from cmsbase.core.hooks import HookEvent, HookRegistry
from cmsbase.domain.entities.hook_context import (
    AbortHookException,
    HookContext,
    HookResult,
)


class TestHookRegistry:
    """Tests for the HookRegistry class."""

    def test_register_returns_unique_id(self) -> None:
        """Test that register() returns a hook_ prefixed ID."""
        registry = HookRegistry()

        def my_hook(event, data, context):
            return data

        hook_id = registry.register(event=HookEvent.ON_ITEM_AFTER_CREATE, callback=my_hook)

        assert hook_id.startswith("hook_")
        assert len(hook_id) > 5

    def test_register_creates_unique_ids(self) -> None:
        """Test that each registration gets a unique ID."""
        registry = HookRegistry()

        def my_hook(event, data, context):
            return data

        hook_ids = [registry.register(HookEvent.ON_ITEM_AFTER_CREATE, my_hook) for _ in range(10)]

        assert len(set(hook_ids)) == 10

    def test_unregister_removes_hook(self) -> None:
        """Test that unregister() removes a hook."""
        registry = HookRegistry()
        calls: list[str] = []

        def my_hook(event, data, context):
            calls.append(event)

        hook_id = registry.register(HookEvent.ON_ITEM_AFTER_CREATE, my_hook)

        assert registry.unregister(hook_id) is True
        registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={})
        assert calls == []

    def test_unregister_returns_false_for_unknown_id(self) -> None:
        registry = HookRegistry()
        assert registry.unregister("hook_nonexistent") is False

    def test_builtin_hook_cannot_be_unregistered(self) -> None:
        """Test that built-in hooks survive unregister()."""
        registry = HookRegistry()
        calls: list[str] = []

        def builtin(event, data, context):
            calls.append(event)

        hook_id = registry.register(HookEvent.ON_ITEM_AFTER_CREATE, builtin, is_builtin=True)

        assert registry.unregister(hook_id) is False
        registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={})
        assert calls == [HookEvent.ON_ITEM_AFTER_CREATE]


class TestHookTrigger:
    """Tests for hook execution."""

    def test_trigger_without_hooks_returns_data(self) -> None:
        registry = HookRegistry()

        result = registry.trigger(HookEvent.ON_ITEM_BEFORE_CREATE, data={"data": {"a": 1}})

        assert isinstance(result, HookResult)
        assert result.success is True
        assert result.data == {"data": {"a": 1}}

    def test_higher_priority_runs_first(self) -> None:
        """Test that hooks run by priority, then registration order."""
        registry = HookRegistry()
        calls: list[str] = []

        def make_hook(name):
            def hook(event, data, context):
                calls.append(name)
                return data

            return hook

        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, make_hook("low"), priority=0)
        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, make_hook("high"), priority=50)
        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, make_hook("low-second"), priority=0)

        registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={})

        assert calls == ["high", "low", "low-second"]

    def test_returned_dict_replaces_data(self) -> None:
        registry = HookRegistry()

        def add_flag(event, data, context):
            return {**data, "flag": True}

        def read_flag(event, data, context):
            assert data["flag"] is True
            return None

        registry.register(HookEvent.ON_ITEM_BEFORE_CREATE, add_flag, priority=10)
        registry.register(HookEvent.ON_ITEM_BEFORE_CREATE, read_flag)

        result = registry.trigger(HookEvent.ON_ITEM_BEFORE_CREATE, data={"data": {}})

        assert result.success is True
        assert result.data == {"data": {}, "flag": True}

    def test_filters_select_matching_hooks(self) -> None:
        """Test that filtered hooks only fire for matching trigger filters."""
        registry = HookRegistry()
        calls: list[str] = []

        def players_only(event, data, context):
            calls.append("players")

        def everywhere(event, data, context):
            calls.append("everywhere")

        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, players_only, filters={"collection": "col_players"})
        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, everywhere)

        registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={}, filters={"collection": "col_cards"})
        assert calls == ["everywhere"]

        calls.clear()
        registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={}, filters={"collection": "col_players"})
        assert calls == ["players", "everywhere"]

    def test_abort_stops_chain(self) -> None:
        """Test that AbortHookException aborts and reports its message."""
        registry = HookRegistry()
        calls: list[str] = []

        def veto(event, data, context):
            raise AbortHookException("Title cannot be empty")

        def after(event, data, context):
            calls.append("after")

        registry.register(HookEvent.ON_ITEM_BEFORE_CREATE, veto, priority=10)
        registry.register(HookEvent.ON_ITEM_BEFORE_CREATE, after)

        result = registry.trigger(HookEvent.ON_ITEM_BEFORE_CREATE, data={"data": {}})

        assert result.success is False
        assert result.aborted is True
        assert result.abort_message == "Title cannot be empty"
        assert calls == []

    def test_error_is_recorded_and_chain_continues(self) -> None:
        registry = HookRegistry()
        calls: list[str] = []

        def broken(event, data, context):
            raise RuntimeError("boom")

        def after(event, data, context):
            calls.append("after")

        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, broken, priority=10)
        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, after)

        result = registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={})

        assert result.success is True
        assert len(result.errors) == 1
        assert "boom" in result.errors[0]
        assert calls == ["after"]

    def test_stop_on_error_fails_trigger(self) -> None:
        """Test that a stop_on_error hook failure ends the chain unsuccessfully."""
        registry = HookRegistry()
        calls: list[str] = []

        def broken(event, data, context):
            raise RuntimeError("boom")

        def after(event, data, context):
            calls.append("after")

        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, broken, priority=10, stop_on_error=True)
        registry.register(HookEvent.ON_ITEM_AFTER_CREATE, after)

        result = registry.trigger(HookEvent.ON_ITEM_AFTER_CREATE, data={})

        assert result.success is False
        assert result.aborted is False
        assert calls == []

    def test_context_is_passed_through(self) -> None:
        registry = HookRegistry()
        seen: list[HookContext] = []

        def capture(event, data, context):
            seen.append(context)

        registry.register(HookEvent.ON_ITEM_AFTER_UPDATE, capture)
        context = HookContext(store=None, collection_id="col_players")

        registry.trigger(HookEvent.ON_ITEM_AFTER_UPDATE, data={}, context=context)

        assert seen == [context]
        assert context.request_id.startswith("hk_")
