"""Migration engine.

Computes pending and executed migrations from a source and a state store,
and runs units forward or backward one at a time. Units run strictly in
sequence: a unit and its store update complete before the next unit starts.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

from loguru import logger

from migrun.core.exceptions import (
    NotFoundError,
    RecordExistsError,
    StoreError,
    UnitExecutionError,
)
from migrun.core.types import MigrationEvent, MigrationUnit, UnitState

from .events import EventNotifier, Listener

if TYPE_CHECKING:
    from migrun.core.types import ExecutionRecord
    from migrun.sources.base import MigrationSource
    from migrun.store.base import StateStore

# Sentinel for down(to=...) meaning "revert everything"
ALL = 0


class Migrator:
    """Runs migration units against an execution state store.

    There is no locking across invocations: at most one Migrator may operate
    on a given store at a time.

    Example:
        migrator = Migrator(FileSystemSource(path), JSONFileStore(state))
        applied = await migrator.up()
        print(f"Applied {len(applied)} migrations")
    """

    def __init__(
        self,
        source: MigrationSource,
        store: StateStore,
        notifier: EventNotifier | None = None,
    ):
        """Initialize Migrator.

        Args:
            source: Source listing all migration units.
            store: Store holding execution records.
            notifier: Event notifier. A new one is created if omitted.
        """
        self.source = source
        self.store = store
        self.notifier = notifier or EventNotifier()
        # Unit states of the most recent up() or down() call
        self.states: dict[str, UnitState] = {}

    def on(self, event: MigrationEvent | str, listener: Listener) -> "Migrator":
        """Register a lifecycle listener on the notifier."""
        self.notifier.on(event, listener)
        return self

    async def pending(self) -> list[MigrationUnit]:
        """Get loaded units that have no execution record, in id order."""
        units = self.source.list_all()
        executed = {r.migration_id for r in self.store.executed()}
        return [u for u in units if u.id not in executed]

    async def executed(self) -> list[ExecutionRecord]:
        """Get execution records in id order."""
        return self.store.executed()

    async def up(self, to: str | None = None) -> list[str]:
        """Apply pending migrations in ascending id order.

        Args:
            to: Last migration to apply. All pending migrations if omitted.

        Returns:
            Ids of the applied migrations.

        Raises:
            NotFoundError: If ``to`` is not a pending migration.
            UnitExecutionError: If a unit's ``up`` fails, or its execution
                cannot be recorded. Units applied before it stay applied;
                their ids are in ``completed``.
        """
        units = await self.pending()

        if to is not None:
            ids = [u.id for u in units]
            if to not in ids:
                raise NotFoundError(f"Migration '{to}' is not pending")
            units = units[: ids.index(to) + 1]

        self.states = {u.id: UnitState.IDLE for u in units}
        if not units:
            logger.debug("No pending migrations to apply")
            return []

        applied: list[str] = []
        for unit in units:
            self._transition(unit, UnitState.RUNNING)
            self.notifier.emit(MigrationEvent.MIGRATING, unit.id)
            await self._run(unit, "up", applied)
            self._record(unit, "up", applied)

            applied.append(unit.id)
            self._transition(unit, UnitState.COMMITTED)
            self.notifier.emit(MigrationEvent.MIGRATED, unit.id)

        logger.info(f"Applied {len(applied)} migration(s)")
        return applied

    async def down(self, to: str | int | None = None) -> list[str]:
        """Revert executed migrations in descending id order.

        Args:
            to: ``None`` reverts only the latest migration, ``0`` reverts
                all of them, an id reverts down to and including that id.

        Returns:
            Ids of the reverted migrations.

        Raises:
            NotFoundError: If ``to`` is not an executed migration, or an
                executed migration has no loaded definition.
            UnitExecutionError: If a unit's ``down`` fails, or its record
                cannot be removed. Units reverted before it stay reverted;
                their ids are in ``completed``.
        """
        units = {u.id: u for u in self.source.list_all()}
        executed = [r.migration_id for r in self.store.executed()]
        self.states = {}
        if not executed:
            logger.debug("No executed migrations to revert")
            return []

        if to is None:
            targets = executed[-1:]
        elif isinstance(to, int) and to == ALL:
            targets = executed
        else:
            if to not in executed:
                raise NotFoundError(f"Migration '{to}' has not been executed")
            targets = executed[executed.index(to) :]

        missing = [m for m in targets if m not in units]
        if missing:
            raise NotFoundError(
                f"Executed migration '{missing[-1]}' has no loaded definition"
            )

        self.states = {m: UnitState.IDLE for m in targets}
        reverted: list[str] = []
        for migration_id in reversed(targets):
            unit = units[migration_id]
            self._transition(unit, UnitState.RUNNING)
            self.notifier.emit(MigrationEvent.REVERTING, unit.id)
            await self._run(unit, "down", reverted)
            self._record(unit, "down", reverted)

            reverted.append(unit.id)
            self._transition(unit, UnitState.COMMITTED)
            self.notifier.emit(MigrationEvent.REVERTED, unit.id)

        logger.info(f"Reverted {len(reverted)} migration(s)")
        return reverted

    async def _run(self, unit: MigrationUnit, direction: str, completed: list[str]) -> None:
        operation = unit.up if direction == "up" else unit.down
        try:
            result = operation()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._transition(unit, UnitState.FAILED)
            logger.error(f"Migration {unit.id} failed ({direction}): {e}")
            raise UnitExecutionError(
                unit.id, direction, str(e), completed=list(completed)
            ) from e

    def _record(self, unit: MigrationUnit, direction: str, completed: list[str]) -> None:
        try:
            if direction == "up":
                self.store.log_migration(unit.id)
            else:
                self.store.unlog_migration(unit.id)
        except RecordExistsError:
            logger.warning(f"Migration {unit.id} was already logged as executed")
        except StoreError as e:
            self._transition(unit, UnitState.FAILED)
            logger.error(f"Migration {unit.id} ran but its state was not saved: {e}")
            raise UnitExecutionError(
                unit.id, direction, f"state not saved: {e}", completed=list(completed)
            ) from e

    def _transition(self, unit: MigrationUnit, state: UnitState) -> None:
        previous = self.states.get(unit.id, UnitState.IDLE)
        self.states[unit.id] = state
        logger.debug(f"{unit.id}: {previous.value} -> {state.value}")
