"""Store construction from configuration."""

from __future__ import annotations

from loguru import logger

from migrun.core.config import Config
from migrun.core.exceptions import StoreError

from .base import StateStore
from .json_file import JSONFileStore
from .memory import MemoryStore
from .relational import SQLAlchemyStore
from .sqlite import SQLiteStore


def create_store(config: Config) -> StateStore:
    """Create the state store selected by ``config.store.backend``.

    Args:
        config: Application configuration.

    Returns:
        A store instance.

    Raises:
        StoreError: If the backend is unknown or misconfigured.
    """
    backend = config.store.backend.lower()
    logger.debug(f"Creating {backend} state store")

    if backend == "json":
        return JSONFileStore(config.store_path())
    if backend == "sqlite":
        return SQLiteStore(config.store_path(), table=config.store.table)
    if backend == "sqlalchemy":
        if not config.store.url:
            raise StoreError("The sqlalchemy store requires a database URL")
        return SQLAlchemyStore(config.store.url, table=config.store.table)
    if backend == "memory":
        return MemoryStore()

    raise StoreError(f"Unknown state store backend: {config.store.backend}")
