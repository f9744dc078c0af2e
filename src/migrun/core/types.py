"""Core data types for migrun."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable

MigrationCallable = Callable[[], "Any | Awaitable[Any]"]


class MigrationEvent(str, Enum):
    """Lifecycle events emitted while the engine runs units."""

    MIGRATING = "migrating"
    MIGRATED = "migrated"
    REVERTING = "reverting"
    REVERTED = "reverted"


class UnitState(str, Enum):
    """State of a single unit within one engine invocation."""

    IDLE = "idle"
    RUNNING = "running"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class MigrationUnit:
    """A named, ordered change with forward and backward operations.

    Attributes:
        id: Unique id, timestamp prefixed (e.g. ``20230101120000-create-users``).
        up: Forward operation. May be a coroutine function.
        down: Backward operation. May be a coroutine function.
        path: Source file, when loaded from a directory.
    """

    id: str
    up: MigrationCallable = field(compare=False)
    down: MigrationCallable = field(compare=False)
    path: Path | None = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"MigrationUnit({self.id!r})"


@dataclass(frozen=True)
class ExecutionRecord:
    """Persisted marker that a migration has been applied."""

    migration_id: str
    executed_at: datetime
