"""JSON file execution state store.

Stores records in a small JSON document:

    {
      "migrations": [
        {"id": "20240101120000-create-users", "executed_at": "2024-01-01T12:00:05+00:00"}
      ]
    }
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from migrun.core.exceptions import RecordExistsError, RecordMissingError, StoreError
from migrun.core.types import ExecutionRecord

from .base import utcnow


class JSONFileStore:
    """Store persisting execution records to a JSON file.

    The file is created on the first write. Every write replaces the file
    atomically so an interrupted process never leaves a truncated document.
    """

    def __init__(self, path: Path):
        """Initialize store with path.

        Args:
            path: Path to the JSON state file.
        """
        self.path = Path(path)

    def executed(self) -> list[ExecutionRecord]:
        records = self._read()
        return [records[k] for k in sorted(records)]

    def log_migration(self, migration_id: str) -> None:
        records = self._read()
        if migration_id in records:
            raise RecordExistsError(migration_id)

        records[migration_id] = ExecutionRecord(migration_id, utcnow())
        self._write(records)
        logger.debug(f"Logged migration {migration_id} in {self.path}")

    def unlog_migration(self, migration_id: str) -> None:
        records = self._read()
        if migration_id not in records:
            raise RecordMissingError(migration_id)

        del records[migration_id]
        self._write(records)
        logger.debug(f"Unlogged migration {migration_id} in {self.path}")

    def close(self) -> None:
        pass

    def _read(self) -> dict[str, ExecutionRecord]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return {
                entry["id"]: ExecutionRecord(
                    migration_id=entry["id"],
                    executed_at=datetime.fromisoformat(entry["executed_at"]),
                )
                for entry in data.get("migrations", [])
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Failed to read state file {self.path}: {e}") from e

    def _write(self, records: dict[str, ExecutionRecord]) -> None:
        data: dict[str, Any] = {
            "migrations": [
                {"id": r.migration_id, "executed_at": r.executed_at.isoformat()}
                for r in (records[k] for k in sorted(records))
            ]
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                    f.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write state file {self.path}: {e}") from e
