"""Base protocol for migration sources.

Uses Protocol (structural subtyping) so the engine can take any object that
lists migration units - a directory scan, an embedded registry, or a test
fake - without inheriting from a base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from migrun.core.types import MigrationUnit


@runtime_checkable
class MigrationSource(Protocol):
    """Discovers migration units.

    Implementations return every known unit sorted ascending by id and raise
    LoadError when a definition cannot be read or is malformed.
    """

    def list_all(self) -> list[MigrationUnit]:
        """List all migration units in ascending id order."""
        ...
