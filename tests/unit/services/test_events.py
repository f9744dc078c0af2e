"""Tests for EventNotifier."""

import pytest

from migrun.core.types import MigrationEvent
from migrun.services import EventNotifier


class TestEventNotifier:
    """Tests for listener registration and fan-out."""

    def test_listeners_called_in_registration_order(self):
        """All listeners of an event run in the order they were added."""
        calls = []
        notifier = EventNotifier()
        notifier.on("migrated", lambda m: calls.append(("first", m)))
        notifier.on("migrated", lambda m: calls.append(("second", m)))

        notifier.emit(MigrationEvent.MIGRATED, "20230101120000-a")

        assert calls == [("first", "20230101120000-a"), ("second", "20230101120000-a")]

    def test_on_is_chainable(self):
        """on() returns the notifier."""
        notifier = EventNotifier()

        result = notifier.on("migrating", print).on("reverted", print)

        assert result is notifier
        assert notifier.listener_count("migrating") == 1
        assert notifier.listener_count(MigrationEvent.REVERTED) == 1

    def test_emit_only_reaches_matching_event(self):
        """Listeners of other events are not called."""
        calls = []
        notifier = EventNotifier()
        notifier.on("reverting", calls.append)

        notifier.emit("migrating", "x")

        assert calls == []

    def test_off_removes_listener(self):
        """A removed listener is no longer called."""
        calls = []
        notifier = EventNotifier()
        notifier.on("migrating", calls.append)
        notifier.off("migrating", calls.append)

        notifier.emit("migrating", "x")

        assert calls == []

    def test_unknown_event_rejected(self):
        """Only the four lifecycle events can be registered."""
        notifier = EventNotifier()

        with pytest.raises(ValueError):
            notifier.on("exploded", print)

    def test_listener_exception_propagates(self):
        """Listener errors are not swallowed and later listeners don't run."""
        calls = []
        notifier = EventNotifier()

        def explode(migration_id):
            raise RuntimeError("boom")

        notifier.on("migrated", explode)
        notifier.on("migrated", calls.append)

        with pytest.raises(RuntimeError, match="boom"):
            notifier.emit("migrated", "x")

        assert calls == []
