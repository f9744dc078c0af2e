"""Execution state stores for migrun.

Example:
    from migrun.store import SQLiteStore

    store = SQLiteStore(Path("state.db"))
    store.log_migration("20240101120000-create-users")
    print([r.migration_id for r in store.executed()])
"""

from .base import StateStore
from .factory import create_store
from .json_file import JSONFileStore
from .memory import MemoryStore
from .relational import SQLAlchemyStore
from .sqlite import SQLiteStore

__all__ = [
    "StateStore",
    "create_store",
    "JSONFileStore",
    "MemoryStore",
    "SQLAlchemyStore",
    "SQLiteStore",
]
