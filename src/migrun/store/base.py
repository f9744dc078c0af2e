"""Execution state store protocol.

Any persistence that can answer "which migrations ran" and record or
forget a single migration can back the engine: a JSON file, a table in a
relational database, or a plain dict in tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from migrun.core.types import ExecutionRecord


@runtime_checkable
class StateStore(Protocol):
    """Persists the set of applied migration ids."""

    def executed(self) -> list[ExecutionRecord]:
        """Get execution records ordered by migration id."""
        ...

    def log_migration(self, migration_id: str) -> None:
        """Record a migration as executed.

        Raises:
            RecordExistsError: If the migration is already recorded.
            StoreError: If the backing storage is unavailable.
        """
        ...

    def unlog_migration(self, migration_id: str) -> None:
        """Remove the execution record of a migration.

        Raises:
            RecordMissingError: If the migration is not recorded.
            StoreError: If the backing storage is unavailable.
        """
        ...

    def close(self) -> None:
        """Release any held resources."""
        ...


def utcnow() -> datetime:
    """Current time in UTC, used as the record timestamp."""
    return datetime.now(timezone.utc)
