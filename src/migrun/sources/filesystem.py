"""Filesystem migration source.

Loads migration units from Python files in a single directory. Each file
must define module-level ``up`` and ``down`` callables; the unit id is the
filename without its ``.py`` suffix.

Example migration (20240101120000-create-users.py):

    def up():
        ...

    async def down():
        ...
"""

from __future__ import annotations

import importlib.util
import re
import sys
from pathlib import Path
from types import ModuleType

from loguru import logger

from migrun.core.config import DEFAULT_PATTERN
from migrun.core.exceptions import LoadError
from migrun.core.types import MigrationUnit


class FileSystemSource:
    """Migration source backed by a directory of Python files.

    Only files whose name matches ``pattern`` are considered, so helper
    modules and the generation template can live next to the migrations.

    Example:
        source = FileSystemSource(Path("migrations"))
        for unit in source.list_all():
            print(unit.id)
    """

    def __init__(self, directory: Path, pattern: str = DEFAULT_PATTERN) -> None:
        """Initialize filesystem source.

        Args:
            directory: Directory holding migration files.
            pattern: Regular expression matched against file names.
        """
        self._directory = Path(directory)
        self._pattern = re.compile(pattern)

    @property
    def directory(self) -> Path:
        """Get the migrations directory."""
        return self._directory

    def list_all(self) -> list[MigrationUnit]:
        """Load every matching migration file, sorted by id.

        Returns:
            Migration units in ascending id order.

        Raises:
            LoadError: If the directory is unreadable or a file is malformed.
        """
        try:
            entries = sorted(self._directory.iterdir())
        except OSError as e:
            raise LoadError(
                f"Cannot read migrations directory {self._directory}: {e}"
            ) from e

        units = []
        for path in entries:
            if not path.is_file() or not self._pattern.match(path.name):
                continue
            units.append(self._load_unit(path))

        units.sort(key=lambda u: u.id)
        logger.debug(f"Loaded {len(units)} migration(s) from {self._directory}")
        return units

    def _load_unit(self, path: Path) -> MigrationUnit:
        module = self._import(path)

        for name in ("up", "down"):
            if not callable(getattr(module, name, None)):
                raise LoadError(f"Migration {path.name} does not define {name}()")

        return MigrationUnit(
            id=path.stem,
            up=module.up,
            down=module.down,
            path=path,
        )

    def _import(self, path: Path) -> ModuleType:
        # Filenames contain dashes, so load by location instead of by name
        module_name = f"migrun_migration_{path.stem.replace('-', '_').replace('.', '_')}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot load migration {path.name}")

        module = importlib.util.module_from_spec(spec)
        # Registered like a regular import so code in the file can resolve
        # its own module, e.g. dataclasses with postponed annotations
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise LoadError(f"Failed to import migration {path.name}: {e}") from e
        return module
