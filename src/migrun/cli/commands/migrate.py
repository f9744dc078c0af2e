"""Migrate, undo and reset commands for the migrun CLI."""

import asyncio

from ...core.config import Config
from ...services import ALL, EventNotifier, ServiceContainer


def attach_progress(notifier: EventNotifier) -> None:
    """Print a line for every lifecycle event."""
    (
        notifier.on("migrating", lambda m: print(f"== {m}: migrating =="))
        .on("migrated", lambda m: print(f"== {m}: migrated ==\n"))
        .on("reverting", lambda m: print(f"== {m}: reverting =="))
        .on("reverted", lambda m: print(f"== {m}: reverted ==\n"))
    )


def handle_check(args, config: Config) -> int:
    """Handle db:migrate:check.

    Returns:
        1 if there are pending migrations, else 0.
    """
    return asyncio.run(_check_async(config))


async def _check_async(config: Config) -> int:
    async with ServiceContainer(config) as services:
        pending = await services.migrator.pending()

    if pending:
        print(f"You have {len(pending)} pending migrations.")
        print("Use '$ migrun db:migrate:status' to show them.")
        print("Use '$ migrun db:migrate' to execute all pending migrations.")
        return 1
    return 0


def handle_migrate(args, config: Config) -> int:
    """Handle db:migrate [destination].

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    return asyncio.run(_migrate_async(config, getattr(args, "destination", None)))


def handle_undo(args, config: Config) -> int:
    """Handle db:migrate:undo [destination]."""
    return asyncio.run(_undo_async(config, getattr(args, "destination", None)))


def handle_undo_all(args, config: Config) -> int:
    """Handle db:migrate:undo:all."""
    return asyncio.run(_undo_async(config, ALL))


def handle_reset(args, config: Config) -> int:
    """Handle db:reset: undo everything, then migrate again."""
    return asyncio.run(_reset_async(config))


async def _migrate_async(config: Config, destination: str | None) -> int:
    async with ServiceContainer(config) as services:
        attach_progress(services.notifier)
        await _migrate(services, destination)
    return 0


async def _undo_async(config: Config, destination: str | int | None) -> int:
    async with ServiceContainer(config) as services:
        attach_progress(services.notifier)
        await _undo(services, destination)
    return 0


async def _reset_async(config: Config) -> int:
    async with ServiceContainer(config) as services:
        attach_progress(services.notifier)
        await _undo(services, ALL)
        await _migrate(services, None)
    return 0


async def _migrate(services: ServiceContainer, destination: str | None) -> None:
    """Execute pending migrations up to destination, or all of them."""
    applied = await services.migrator.up(to=destination)

    if applied:
        print(f"Executed {len(applied)} migrations.")
    else:
        print("No migrations were executed.")


async def _undo(services: ServiceContainer, destination: str | int | None) -> None:
    """Revert the latest migration, or all down to destination."""
    reverted = await services.migrator.down(to=destination)

    if reverted:
        print(f"Reverted {len(reverted)} migrations.")
    else:
        print("No migrations were reverted.")
