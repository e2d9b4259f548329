"""Append-only registry of webhook subscribers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from hookshot.models import EventType, Hook


class HookRegistry:
    """Ordered list of hooks owned by a single client.

    Hooks are only ever appended. Duplicate URLs are allowed and each
    entry is delivered to on its own.
    """

    def __init__(self, hooks: Iterable[Hook] = ()) -> None:
        self._hooks: list[Hook] = list(hooks)

    def add(self, url: str, events: Iterable[EventType] | None = None) -> Hook:
        """Append a hook to the end of the registry.

        Args:
            url: Endpoint to POST to.
            events: Event types the hook receives. None means all; a single
                string is one event type.

        Returns:
            The registered hook.
        """
        if isinstance(events, str):
            events = [events]
        hook = Hook(url=url, events=list(events) if events is not None else None)
        self._hooks.append(hook)
        return hook

    def match(self, event_type: EventType) -> list[Hook]:
        """Return hooks that receive ``event_type``, in registration order."""
        return [hook for hook in self._hooks if hook.wants(event_type)]

    def snapshot(self) -> tuple[Hook, ...]:
        return tuple(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def __iter__(self) -> Iterator[Hook]:
        return iter(self.snapshot())
