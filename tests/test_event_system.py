"""Tests for the event system."""

import pytest
from delve.event_system import EventBus, Event, EventData


class TestEventBus:
    """Test EventBus functionality."""

    def test_create_empty_bus(self):
        """Should create an empty event bus."""
        bus = EventBus()
        assert bus.handler_count() == 0

    def test_subscribe_handler(self):
        """Should allow subscribing handlers to events."""
        bus = EventBus()

        def handler(event_data: EventData) -> None:
            pass

        bus.subscribe(Event.LEVEL_START, handler)
        assert bus.handler_count(Event.LEVEL_START) == 1
        assert bus.handler_count() == 1

    def test_emit_calls_handler(self):
        """Emitting an event should call subscribed handlers."""
        bus = EventBus()
        called = []

        def handler(event_data: EventData) -> None:
            called.append(event_data)

        bus.subscribe(Event.PLAYER_MOVED, handler)
        bus.emit(Event.PLAYER_MOVED, x=3, y=4)

        assert len(called) == 1
        assert called[0].event == Event.PLAYER_MOVED
        assert called[0].kwargs == {"x": 3, "y": 4}

    def test_handlers_called_in_subscription_order(self):
        bus = EventBus()
        order = []

        bus.subscribe(Event.INTERACTION, lambda e: order.append("first"))
        bus.subscribe(Event.INTERACTION, lambda e: order.append("second"))
        bus.emit(Event.INTERACTION)

        assert order == ["first", "second"]

    def test_emit_only_calls_matching_event_handlers(self):
        """Should only call handlers subscribed to the emitted event."""
        bus = EventBus()
        called_start = []
        called_end = []

        bus.subscribe(Event.LEVEL_START, lambda e: called_start.append(e.event))
        bus.subscribe(Event.LEVEL_END, lambda e: called_end.append(e.event))
        bus.emit(Event.LEVEL_START)

        assert len(called_start) == 1
        assert len(called_end) == 0

    def test_unsubscribe_handler(self):
        """Should allow unsubscribing handlers."""
        bus = EventBus()
        called = []

        def handler(event_data: EventData) -> None:
            called.append(event_data.event)

        bus.subscribe(Event.CELL_CLEARED, handler)
        bus.emit(Event.CELL_CLEARED, x=1, y=1)
        assert len(called) == 1

        bus.unsubscribe(Event.CELL_CLEARED, handler)
        bus.emit(Event.CELL_CLEARED, x=1, y=1)
        assert len(called) == 1  # Still 1, not called again

    def test_unsubscribe_nonexistent_handler_raises(self):
        """Unsubscribing a handler that wasn't subscribed should raise ValueError."""
        bus = EventBus()

        def handler(event_data: EventData) -> None:
            pass

        with pytest.raises(ValueError):
            bus.unsubscribe(Event.LEVEL_START, handler)

    def test_handler_may_unsubscribe_itself(self):
        bus = EventBus()
        called = []

        def once(event_data: EventData) -> None:
            called.append(True)
            bus.unsubscribe(Event.PLAYER_DIED, once)

        bus.subscribe(Event.PLAYER_DIED, once)
        bus.emit(Event.PLAYER_DIED, health=0)
        bus.emit(Event.PLAYER_DIED, health=0)

        assert called == [True]

    def test_clear_removes_all_handlers(self):
        """Clear should remove all event handlers."""
        bus = EventBus()
        bus.subscribe(Event.LEVEL_START, lambda e: None)
        bus.subscribe(Event.PLAYER_MOVED, lambda e: None)
        assert bus.handler_count() == 2

        bus.clear()
        assert bus.handler_count() == 0

    def test_handler_error_does_not_crash_bus(self):
        """If a handler raises an error, other handlers should still be called."""
        bus = EventBus()
        called = []

        def bad_handler(event_data: EventData) -> None:
            raise RuntimeError("Handler failed")

        bus.subscribe(Event.CELL_CLEARED, bad_handler)
        bus.subscribe(Event.CELL_CLEARED, lambda e: called.append(True))

        # Should not raise, good handler should still be called
        bus.emit(Event.CELL_CLEARED, x=5, y=10, category=None)
        assert len(called) == 1

    def test_handler_error_reraised_in_debug(self):
        bus = EventBus()
        bus.set_debug(True)

        def bad_handler(event_data: EventData) -> None:
            raise RuntimeError("Handler failed")

        bus.subscribe(Event.LEVEL_END, bad_handler)

        with pytest.raises(RuntimeError):
            bus.emit(Event.LEVEL_END, level=1)

    def test_debug_echoes_events(self, capsys):
        bus = EventBus()
        bus.set_debug(True)
        bus.emit(Event.LEVEL_START, level=2)

        assert "LEVEL_START" in capsys.readouterr().err

    def test_emit_event_with_no_handlers(self):
        """Emitting an event with no handlers should not raise an error."""
        bus = EventBus()
        bus.emit(Event.LEVEL_START)


class TestEventData:
    """Test EventData class."""

    def test_event_data_repr_with_kwargs(self):
        """EventData repr should include kwargs."""
        data = EventData(event=Event.PLAYER_MOVED, kwargs={"x": 2})
        repr_str = repr(data)
        assert "PLAYER_MOVED" in repr_str
        assert "x=2" in repr_str

    def test_event_data_repr_without_kwargs(self):
        """EventData repr should work without kwargs."""
        data = EventData(event=Event.LEVEL_START)
        assert repr(data) == "EventData(LEVEL_START)"
