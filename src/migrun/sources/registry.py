"""In-process migration registry.

Lets an application embed its migrations in code instead of a directory:

    registry = RegistrySource()

    @registry.migration("20240101120000-create-users")
    class CreateUsers:
        @staticmethod
        def up(): ...

        @staticmethod
        def down(): ...
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from migrun.core.exceptions import LoadError
from migrun.core.types import MigrationCallable, MigrationUnit

T = TypeVar("T")


class RegistrySource:
    """Migration source holding explicitly registered units."""

    def __init__(self) -> None:
        self._units: dict[str, MigrationUnit] = {}

    def register(
        self,
        migration_id: str,
        up: MigrationCallable,
        down: MigrationCallable,
    ) -> MigrationUnit:
        """Register a migration.

        Raises:
            LoadError: If the id is already registered or an operation is
                not callable.
        """
        if migration_id in self._units:
            raise LoadError(f"Migration '{migration_id}' is already registered")
        if not callable(up) or not callable(down):
            raise LoadError(f"Migration '{migration_id}' must define up() and down()")

        unit = MigrationUnit(id=migration_id, up=up, down=down)
        self._units[migration_id] = unit
        return unit

    def migration(self, migration_id: str) -> Callable[[T], T]:
        """Decorator registering an object that exposes ``up`` and ``down``."""

        def decorator(obj: T) -> T:
            target: Any = obj
            self.register(
                migration_id,
                getattr(target, "up", None),
                getattr(target, "down", None),
            )
            return obj

        return decorator

    def list_all(self) -> list[MigrationUnit]:
        """List registered units sorted by id."""
        return sorted(self._units.values(), key=lambda u: u.id)

    def __len__(self) -> int:
        return len(self._units)
