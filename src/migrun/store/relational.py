"""SQLAlchemy execution state store.

Keeps execution records in a table of any database SQLAlchemy can reach:

    store = SQLAlchemyStore("postgresql+psycopg://user@host/app")
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import Column, MetaData, String, Table, create_engine, delete, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from migrun.core.exceptions import RecordExistsError, RecordMissingError, StoreError
from migrun.core.types import ExecutionRecord

from .base import utcnow


class SQLAlchemyStore:
    """Store persisting execution records through SQLAlchemy Core."""

    def __init__(self, url: str, table: str = "migrations_meta"):
        """Initialize store.

        Args:
            url: SQLAlchemy database URL (e.g. "sqlite:///state.db").
            table: Name of the records table.
        """
        self.url = url
        self._metadata = MetaData()
        self._table = Table(
            table,
            self._metadata,
            Column("name", String(255), primary_key=True),
            Column("executed_at", String(64), nullable=False),
        )
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        """Get the engine, creating it and the records table on first use."""
        if self._engine is None:
            try:
                engine = create_engine(self.url)
                self._metadata.create_all(engine)
            except SQLAlchemyError as e:
                raise StoreError(f"Failed to connect to {self.url}: {e}") from e
            self._engine = engine
        return self._engine

    def executed(self) -> list[ExecutionRecord]:
        query = select(self._table.c.name, self._table.c.executed_at).order_by(
            self._table.c.name
        )
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(query).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read executed migrations: {e}") from e

        return [
            ExecutionRecord(name, datetime.fromisoformat(executed_at))
            for name, executed_at in rows
        ]

    def log_migration(self, migration_id: str) -> None:
        exists = select(self._table.c.name).where(self._table.c.name == migration_id)
        try:
            with self.engine.begin() as connection:
                if connection.execute(exists).first() is not None:
                    raise RecordExistsError(migration_id)
                connection.execute(
                    insert(self._table).values(
                        name=migration_id, executed_at=utcnow().isoformat()
                    )
                )
        except IntegrityError as e:
            raise RecordExistsError(migration_id) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to log migration {migration_id}: {e}") from e
        logger.debug(f"Logged migration {migration_id}")

    def unlog_migration(self, migration_id: str) -> None:
        statement = delete(self._table).where(self._table.c.name == migration_id)
        try:
            with self.engine.begin() as connection:
                result = connection.execute(statement)
                if result.rowcount == 0:
                    raise RecordMissingError(migration_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to unlog migration {migration_id}: {e}") from e
        logger.debug(f"Unlogged migration {migration_id}")

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
