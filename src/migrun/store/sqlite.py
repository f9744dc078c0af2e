"""SQLite execution state store."""

from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

from loguru import logger

from migrun.core.exceptions import RecordExistsError, RecordMissingError, StoreError
from migrun.core.types import ExecutionRecord

from .base import utcnow

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SQLiteStore:
    """Store persisting execution records in a SQLite table.

    The connection is opened lazily on first use and the records table is
    created if it does not exist. Reading a database file that does not
    exist yet returns no records without creating it.

    Example:
        store = SQLiteStore(Path("state.db"))
        store.log_migration("20240101120000-create-users")
        store.close()
    """

    def __init__(self, path: Path, table: str = "migrations_meta"):
        """Initialize store with path.

        Args:
            path: Path to the SQLite database file.
            table: Name of the records table.

        Raises:
            StoreError: If the table name is not a plain identifier.
        """
        if not _IDENTIFIER.match(table):
            raise StoreError(f"Invalid table name: {table!r}")
        self.path = Path(path)
        self.table = table
        self._connection: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open the database connection and create the records table."""
        if self._connection is not None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.path))
            self._connection.row_factory = sqlite3.Row
            # Table name is validated in __init__, identifiers can't be bound
            self._connection.execute(
                f"CREATE TABLE IF NOT EXISTS {self.table} ("
                "name TEXT PRIMARY KEY, executed_at TEXT NOT NULL)"
            )
            self._connection.commit()
        except (OSError, sqlite3.Error) as e:
            self._connection = None
            raise StoreError(f"Failed to connect to state database: {e}") from e

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            try:
                self._connection.close()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to close state database: {e}") from e
            finally:
                self._connection = None

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Cursor]:
        self.connect()
        assert self._connection is not None

        cursor = self._connection.cursor()
        try:
            yield cursor
            self._connection.commit()
        except sqlite3.Error as e:
            self._connection.rollback()
            raise StoreError(f"State database operation failed: {e}") from e
        except BaseException:
            self._connection.rollback()
            raise
        finally:
            cursor.close()

    def executed(self) -> list[ExecutionRecord]:
        # Reads never create the database file or its directory
        if self._connection is None and not self.path.exists():
            return []

        with self._transaction() as cursor:
            rows = cursor.execute(
                f"SELECT name, executed_at FROM {self.table} ORDER BY name"
            ).fetchall()
        return [
            ExecutionRecord(row["name"], datetime.fromisoformat(row["executed_at"]))
            for row in rows
        ]

    def log_migration(self, migration_id: str) -> None:
        with self._transaction() as cursor:
            row = cursor.execute(
                f"SELECT 1 FROM {self.table} WHERE name = ?", (migration_id,)
            ).fetchone()
            if row is not None:
                raise RecordExistsError(migration_id)
            cursor.execute(
                f"INSERT INTO {self.table} (name, executed_at) VALUES (?, ?)",
                (migration_id, utcnow().isoformat()),
            )
        logger.debug(f"Logged migration {migration_id} in {self.path}")

    def unlog_migration(self, migration_id: str) -> None:
        with self._transaction() as cursor:
            cursor.execute(
                f"DELETE FROM {self.table} WHERE name = ?", (migration_id,)
            )
            if cursor.rowcount == 0:
                raise RecordMissingError(migration_id)
        logger.debug(f"Unlogged migration {migration_id} in {self.path}")
