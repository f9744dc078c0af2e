"""Service container wiring the migration engine from configuration."""

from __future__ import annotations

from loguru import logger

from ..core.config import Config
from ..sources import FileSystemSource
from ..store import StateStore, create_store
from .events import EventNotifier
from .migrator import Migrator


class ServiceContainer:
    """Builds and owns the source, store and engine for one invocation.

    The store is created lazily on first access and closed when the
    container closes.

    Usage as context manager (recommended):

        async with ServiceContainer(config) as services:
            services.notifier.on("migrated", print)
            applied = await services.migrator.up()

    Attributes:
        config: Application configuration.
        notifier: Event notifier shared with the engine.
    """

    def __init__(self, config: Config):
        """Initialize container with configuration.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.notifier = EventNotifier()

        self._source: FileSystemSource | None = None
        self._store: StateStore | None = None
        self._migrator: Migrator | None = None

    async def close(self) -> None:
        """Close the store."""
        if self._store is not None:
            self._store.close()
            self._store = None
            self._migrator = None
            logger.debug("ServiceContainer closed")

    async def __aenter__(self) -> "ServiceContainer":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def source(self) -> FileSystemSource:
        """Get or create the filesystem migration source."""
        if self._source is None:
            self._source = FileSystemSource(
                self.config.migrations_dir, pattern=self.config.pattern
            )
        return self._source

    @property
    def store(self) -> StateStore:
        """Get or create the configured state store."""
        if self._store is None:
            self._store = create_store(self.config)
        return self._store

    @property
    def migrator(self) -> Migrator:
        """Get or create the migration engine."""
        if self._migrator is None:
            self._migrator = Migrator(self.source, self.store, self.notifier)
        return self._migrator
