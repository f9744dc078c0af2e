"""Core types, configuration and exceptions for migrun."""

from .config import DEFAULT_PATTERN, Config, StoreConfig
from .exceptions import (
    LoadError,
    MigrunError,
    NotFoundError,
    RecordExistsError,
    RecordMissingError,
    StoreError,
    UnitExecutionError,
)
from .types import (
    ExecutionRecord,
    MigrationCallable,
    MigrationEvent,
    MigrationUnit,
    UnitState,
)

__all__ = [
    "Config",
    "StoreConfig",
    "DEFAULT_PATTERN",
    "MigrunError",
    "LoadError",
    "StoreError",
    "RecordExistsError",
    "RecordMissingError",
    "NotFoundError",
    "UnitExecutionError",
    "ExecutionRecord",
    "MigrationCallable",
    "MigrationEvent",
    "MigrationUnit",
    "UnitState",
]
