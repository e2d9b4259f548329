"""Unit tests for the hook registry."""

from hookshot.models import Hook
from hookshot.registry import HookRegistry


class TestHookRegistry:
    """Tests for HookRegistry."""

    def test_starts_empty(self):
        """A new registry holds no hooks."""
        registry = HookRegistry()
        assert len(registry) == 0
        assert registry.match("anything") == []

    def test_initial_hooks_are_copied(self):
        """Initial hooks are copied, not aliased."""
        initial = [Hook(url="https://a.example.com")]
        registry = HookRegistry(initial)
        registry.add("https://b.example.com")
        assert len(initial) == 1
        assert len(registry) == 2

    def test_add_appends_in_order(self):
        """add appends to the end and returns the hook."""
        registry = HookRegistry()
        first = registry.add("https://a.example.com")
        second = registry.add("https://b.example.com", ["did_something"])
        assert list(registry) == [first, second]
        assert second.events == ["did_something"]

    def test_add_allows_duplicates(self):
        """Duplicate URLs are kept as separate entries."""
        registry = HookRegistry()
        registry.add("https://a.example.com")
        registry.add("https://a.example.com")
        assert len(registry.match("did_something")) == 2

    def test_match_unfiltered_hook_receives_everything(self):
        """Hooks without an events filter match every event type."""
        registry = HookRegistry()
        registry.add("https://a.example.com")
        assert len(registry.match("did_something")) == 1
        assert len(registry.match("something_else")) == 1

    def test_match_filters_by_event(self):
        """Filtered hooks only match listed events, in registration order."""
        registry = HookRegistry()
        registry.add("https://all.example.com")
        registry.add("https://specific.example.com", ["project.created"])
        registry.add("https://other.example.com", ["job.completed"])

        created = registry.match("project.created")
        assert [h.url for h in created] == [
            "https://all.example.com",
            "https://specific.example.com",
        ]

        completed = registry.match("job.completed")
        assert [h.url for h in completed] == [
            "https://all.example.com",
            "https://other.example.com",
        ]

    def test_empty_events_filter_matches_nothing(self):
        """An explicit empty filter is not the same as no filter."""
        registry = HookRegistry()
        registry.add("https://a.example.com", [])
        assert registry.match("did_something") == []

    def test_single_event_string(self):
        """A bare string is one event type, not a sequence of characters."""
        registry = HookRegistry()
        hook = registry.add("https://a.example.com", "did_something")
        assert hook.events == ["did_something"]
        assert registry.match("d") == []
        assert registry.match("did_something") == [hook]

    def test_events_iterable_is_materialized(self):
        """Any iterable of event types is accepted."""
        registry = HookRegistry()
        hook = registry.add("https://a.example.com", (e for e in ["a", "b"]))
        assert hook.events == ["a", "b"]

    def test_snapshot_is_immutable(self):
        """snapshot returns a tuple unaffected by later adds."""
        registry = HookRegistry()
        registry.add("https://a.example.com")
        snap = registry.snapshot()
        registry.add("https://b.example.com")
        assert isinstance(snap, tuple)
        assert len(snap) == 1
