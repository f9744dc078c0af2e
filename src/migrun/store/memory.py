"""In-memory execution state store."""

from __future__ import annotations

from migrun.core.exceptions import RecordExistsError, RecordMissingError
from migrun.core.types import ExecutionRecord

from .base import utcnow


class MemoryStore:
    """Non-durable store keeping records in a dict.

    Useful for tests and dry runs; state is lost when the process exits.
    """

    def __init__(self) -> None:
        self._records: dict[str, ExecutionRecord] = {}

    def executed(self) -> list[ExecutionRecord]:
        return [self._records[k] for k in sorted(self._records)]

    def log_migration(self, migration_id: str) -> None:
        if migration_id in self._records:
            raise RecordExistsError(migration_id)
        self._records[migration_id] = ExecutionRecord(migration_id, utcnow())

    def unlog_migration(self, migration_id: str) -> None:
        if migration_id not in self._records:
            raise RecordMissingError(migration_id)
        del self._records[migration_id]

    def close(self) -> None:
        pass
