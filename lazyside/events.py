"""Host notification sources the side panel subscribes to.

Handlers run synchronously, in registration order, inside the host's event
loop. Emission iterates over a snapshot so handlers may unsubscribe (or
subscribe) while an event is being delivered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field


class EventSource:
    """Ordered, duplicate-free set of handlers for one host event."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[..., object]] = []

    def subscribe(self, handler: Callable[..., object]) -> bool:
        """Register ``handler``; return False when it was already registered."""
        if handler in self._handlers:
            return False
        self._handlers.append(handler)
        return True

    def unsubscribe(self, handler: Callable[..., object]) -> bool:
        """Drop ``handler``; return False when it was not registered."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def is_subscribed(self, handler: Callable[..., object]) -> bool:
        return handler in self._handlers

    def handler_count(self) -> int:
        return len(self._handlers)

    def emit(self, *args: object) -> None:
        for handler in list(self._handlers):
            handler(*args)


@dataclass
class HostEvents:
    """Events fired by the host.

    ``project_switched`` carries the new project root (or ``None`` when the
    host could not tell); ``layout_changed`` carries nothing and handlers must
    requery window state.
    """

    project_switched: EventSource = field(default_factory=lambda: EventSource("project-switched"))
    layout_changed: EventSource = field(default_factory=lambda: EventSource("layout-changed"))
