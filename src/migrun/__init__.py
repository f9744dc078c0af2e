"""migrun - run ordered up/down migrations from the command line."""

from .core import (
    Config,
    ExecutionRecord,
    LoadError,
    MigrationEvent,
    MigrationUnit,
    MigrunError,
    NotFoundError,
    StoreError,
    UnitExecutionError,
)
from .services import ALL, EventNotifier, Migrator, ServiceContainer, generate_migration
from .sources import FileSystemSource, RegistrySource
from .store import JSONFileStore, MemoryStore, SQLAlchemyStore, SQLiteStore, create_store

__version__ = "1.0.0"

__all__ = [
    "ALL",
    "Config",
    "EventNotifier",
    "ExecutionRecord",
    "FileSystemSource",
    "JSONFileStore",
    "LoadError",
    "MemoryStore",
    "MigrationEvent",
    "MigrationUnit",
    "Migrator",
    "MigrunError",
    "NotFoundError",
    "RegistrySource",
    "SQLAlchemyStore",
    "SQLiteStore",
    "ServiceContainer",
    "StoreError",
    "UnitExecutionError",
    "create_store",
    "generate_migration",
]
