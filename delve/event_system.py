"""
Event bus for dungeon gameplay.

The orchestrator announces what happens during a run (levels starting and
ending, the player moving, interactions, cells being cleared) and any number
of listeners (renderers, sound, statistics) can react without the core
knowing about them.
"""

import sys
from enum import Enum, auto
from typing import Callable, Any, Dict, List, Optional
from dataclasses import dataclass, field


class Event(Enum):
    """Event types that can occur during a run."""

    # Level lifecycle
    LEVEL_START = auto()  # kwargs: level, width, height
    LEVEL_END = auto()  # kwargs: level

    # Player events
    PLAYER_MOVED = auto()  # kwargs: x, y
    PLAYER_DIED = auto()  # kwargs: health

    # Interaction events
    INTERACTION = auto()  # kwargs: category, outcome
    CELL_CLEARED = auto()  # kwargs: x, y, category


@dataclass
class EventData:
    """Container for event data passed to handlers."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.kwargs:
            kwargs_str = ", ".join(f"{k}={v}" for k, v in self.kwargs.items())
            return f"EventData({self.event.name}, {kwargs_str})"
        return f"EventData({self.event.name})"


# Event handler signature: takes event data, returns nothing
EventHandler = Callable[[EventData], None]


class EventBus:
    """
    Publish/subscribe hub for gameplay events.

    Handlers run synchronously, in subscription order, inside emit().
    """

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[EventHandler]] = {}
        self._debug: bool = False

    def set_debug(self, debug: bool) -> None:
        """Echo every emitted event to stderr, and let handler errors propagate."""
        self._debug = debug

    def subscribe(self, event: Event, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Remove a handler.

        Raises:
            ValueError: If handler was not subscribed to this event
        """
        handlers = self._handlers.get(event, [])
        if handler not in handlers:
            raise ValueError(f"Handler not subscribed to event {event.name}")
        handlers.remove(handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        """
        Call every handler subscribed to the event.

        A failing handler is reported on stderr and the remaining handlers
        still run. In debug mode the error is re-raised instead.
        """
        event_data = EventData(event=event, kwargs=kwargs)

        if self._debug:
            print(f"[EventBus] Emitting: {event_data}", file=sys.stderr)

        # Copy so handlers may unsubscribe themselves
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(event_data)
            except Exception as e:
                print(f"[EventBus] Handler error for {event.name}: {e}", file=sys.stderr)
                if self._debug:
                    raise

    def clear(self) -> None:
        """Remove all event handlers."""
        self._handlers.clear()

    def handler_count(self, event: Optional[Event] = None) -> int:
        """Handlers for one event, or across all events when event is None."""
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(handlers) for handlers in self._handlers.values())
