"""Lifecycle event notifier for migration runs."""

from __future__ import annotations

from typing import Callable

from migrun.core.types import MigrationEvent

Listener = Callable[[str], object]


class EventNotifier:
    """Ordered, synchronous fan-out of migration lifecycle events.

    Listeners receive the migration id. All listeners of an event run in
    registration order before the engine moves on. Exceptions raised by a
    listener are not caught here: they abort the running engine operation.

    Example:
        notifier = EventNotifier()
        notifier.on("migrating", lambda m: print(f"== {m}: migrating =="))
    """

    def __init__(self) -> None:
        self._listeners: dict[MigrationEvent, list[Listener]] = {
            event: [] for event in MigrationEvent
        }

    def on(self, event: MigrationEvent | str, listener: Listener) -> "EventNotifier":
        """Register a listener. Returns self so calls can be chained.

        Raises:
            ValueError: If the event name is unknown.
        """
        self._listeners[MigrationEvent(event)].append(listener)
        return self

    def off(self, event: MigrationEvent | str, listener: Listener) -> None:
        """Remove a previously registered listener, if present."""
        listeners = self._listeners[MigrationEvent(event)]
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: MigrationEvent | str, migration_id: str) -> None:
        """Invoke every listener of ``event`` with the migration id."""
        for listener in list(self._listeners[MigrationEvent(event)]):
            listener(migration_id)

    def listener_count(self, event: MigrationEvent | str) -> int:
        """Get the number of listeners registered for ``event``."""
        return len(self._listeners[MigrationEvent(event)])
