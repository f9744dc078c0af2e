"""Status and history commands for the migrun CLI."""

import asyncio

from ...core.config import Config
from ...services import ServiceContainer


def handle_status(args, config: Config) -> int:
    """Handle db:migrate:status: list pending migrations."""
    return asyncio.run(_handle_status_async(config))


def handle_history(args, config: Config) -> int:
    """Handle db:migrate:history: list executed migrations."""
    return asyncio.run(_handle_history_async(config))


async def _handle_status_async(config: Config) -> int:
    async with ServiceContainer(config) as services:
        pending = await services.migrator.pending()

    if pending:
        print("Pending migrations:")
        _print_migrations([unit.id for unit in pending])
    else:
        print("No pending migrations.")
    return 0


async def _handle_history_async(config: Config) -> int:
    async with ServiceContainer(config) as services:
        executed = await services.migrator.executed()

    if executed:
        print("Executed migrations:")
        _print_migrations([record.migration_id for record in executed])
    else:
        print("No executed migrations.")
    return 0


def _print_migrations(migration_ids: list[str]) -> None:
    for index, migration_id in enumerate(migration_ids, start=1):
        print(f"  {index}) {migration_id}")
