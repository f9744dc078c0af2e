"""Tests for ServiceContainer."""

from pathlib import Path

import pytest

from migrun.core.config import Config
from migrun.services import ServiceContainer
from migrun.sources import FileSystemSource
from migrun.store import JSONFileStore, SQLiteStore
from tests.fakes import A, B, read_log, write_migration


class TestServiceContainer:
    """Tests for wiring and lifecycle."""

    def test_builds_filesystem_source_from_config(self, config: Config):
        """The source scans the configured migrations directory."""
        container = ServiceContainer(config)

        assert isinstance(container.source, FileSystemSource)
        assert container.source.directory == config.migrations_dir

    def test_store_backend_from_config(self, config: Config):
        """The configured backend is created lazily and cached."""
        config.store.backend = "sqlite"
        container = ServiceContainer(config)

        store = container.store

        assert isinstance(store, SQLiteStore)
        assert container.store is store

    def test_migrator_shares_notifier(self, config: Config):
        """Listeners registered on the container reach the engine."""
        container = ServiceContainer(config)

        assert container.migrator.notifier is container.notifier

    @pytest.mark.asyncio
    async def test_context_manager_runs_and_closes(self, config: Config):
        """Migrations run from disk and the store is released on exit."""
        write_migration(config.migrations_dir, A)
        write_migration(config.migrations_dir, B)

        async with ServiceContainer(config) as services:
            assert isinstance(services.store, JSONFileStore)
            applied = await services.migrator.up()

        assert applied == [A, B]
        assert services._store is None
        assert read_log(config.migrations_dir) == [f"up {A}", f"up {B}"]

        async with ServiceContainer(config) as services:
            assert await services.migrator.pending() == []
