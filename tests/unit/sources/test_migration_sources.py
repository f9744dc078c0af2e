"""Tests for migration sources."""

import sys
from pathlib import Path

import pytest

from migrun.core.exceptions import LoadError
from migrun.sources import FileSystemSource, MigrationSource, RegistrySource
from tests.fakes import A, B, C, write_migration


class TestFileSystemSource:
    """Tests for FileSystemSource."""

    def test_empty_directory(self, migrations_dir: Path):
        """An empty directory has no units."""
        assert FileSystemSource(migrations_dir).list_all() == []

    def test_units_sorted_by_id(self, migrations_dir: Path):
        """Units come back ascending regardless of creation order."""
        for migration_id in (C, A, B):
            write_migration(migrations_dir, migration_id)

        units = FileSystemSource(migrations_dir).list_all()

        assert [u.id for u in units] == [A, B, C]
        assert units[0].path == migrations_dir / f"{A}.py"

    def test_non_matching_files_ignored(self, migrations_dir: Path):
        """The template, package markers and notes are not migrations."""
        write_migration(migrations_dir, A)
        (migrations_dir / "migration.sample.py").write_text("raise SystemExit\n")
        (migrations_dir / "__init__.py").write_text("")
        (migrations_dir / "README.md").write_text("notes")
        (migrations_dir / "20230101-short.py").write_text("raise SystemExit\n")

        units = FileSystemSource(migrations_dir).list_all()

        assert [u.id for u in units] == [A]

    def test_custom_pattern(self, migrations_dir: Path):
        """A custom pattern selects a different naming scheme."""
        write_migration(migrations_dir, "0001_initial")
        write_migration(migrations_dir, A)

        units = FileSystemSource(migrations_dir, pattern=r"^\d{4}_\w+\.py$").list_all()

        assert [u.id for u in units] == ["0001_initial"]

    def test_loaded_functions_are_callable(self, migrations_dir: Path):
        """up and down are the module's functions."""
        write_migration(
            migrations_dir,
            A,
            "STATE = []\n\ndef up():\n    return 'up'\n\ndef down():\n    return 'down'\n",
        )

        unit = FileSystemSource(migrations_dir).list_all()[0]

        assert unit.up() == "up"
        assert unit.down() == "down"

    def test_missing_down_raises(self, migrations_dir: Path):
        """A definition without down() is malformed."""
        write_migration(migrations_dir, A, "def up():\n    pass\n")

        with pytest.raises(LoadError, match="down"):
            FileSystemSource(migrations_dir).list_all()

    def test_non_callable_up_raises(self, migrations_dir: Path):
        """up must be callable."""
        write_migration(migrations_dir, A, "up = 1\n\ndef down():\n    pass\n")

        with pytest.raises(LoadError, match="up"):
            FileSystemSource(migrations_dir).list_all()

    def test_import_error_raises_load_error(self, migrations_dir: Path):
        """A module that fails to import is reported as LoadError."""
        write_migration(migrations_dir, A, "import does_not_exist_anywhere\n")

        with pytest.raises(LoadError) as exc_info:
            FileSystemSource(migrations_dir).list_all()

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_missing_directory_raises(self, tmp_path: Path):
        """An unreadable directory is a LoadError."""
        with pytest.raises(LoadError):
            FileSystemSource(tmp_path / "absent").list_all()

    def test_dataclass_with_postponed_annotations(self, migrations_dir: Path):
        """A migration may define dataclasses under postponed annotations."""
        write_migration(
            migrations_dir,
            A,
            "from __future__ import annotations\n\n"
            "from dataclasses import dataclass\n\n\n"
            "@dataclass\nclass Row:\n    name: str\n\n\n"
            "def up():\n    return Row('users').name\n\n\n"
            "def down():\n    pass\n",
        )

        unit = FileSystemSource(migrations_dir).list_all()[0]

        assert unit.up() == "users"

    def test_failed_import_is_not_registered(self, migrations_dir: Path):
        """A file that fails to import leaves no module behind."""
        write_migration(migrations_dir, A, "raise RuntimeError('boom')\n")

        with pytest.raises(LoadError):
            FileSystemSource(migrations_dir).list_all()

        assert f"migrun_migration_{A.replace('-', '_')}" not in sys.modules

    def test_satisfies_protocol(self, migrations_dir: Path):
        """FileSystemSource is a MigrationSource."""
        assert isinstance(FileSystemSource(migrations_dir), MigrationSource)


class TestRegistrySource:
    """Tests for RegistrySource."""

    def test_register_and_list_sorted(self):
        """Registered units are listed by id."""
        registry = RegistrySource()
        registry.register(B, lambda: None, lambda: None)
        registry.register(A, lambda: None, lambda: None)

        assert [u.id for u in registry.list_all()] == [A, B]
        assert len(registry) == 2

    def test_decorator_registers_object(self):
        """The decorator reads up and down off the decorated class."""
        registry = RegistrySource()

        @registry.migration(A)
        class CreateUsers:
            @staticmethod
            def up():
                return "up"

            @staticmethod
            def down():
                return "down"

        unit = registry.list_all()[0]
        assert unit.id == A
        assert unit.up() == "up"
        assert CreateUsers.down() == "down"

    def test_duplicate_id_raises(self):
        """Ids are unique."""
        registry = RegistrySource()
        registry.register(A, lambda: None, lambda: None)

        with pytest.raises(LoadError):
            registry.register(A, lambda: None, lambda: None)

    def test_missing_operation_raises(self):
        """Objects without down() are rejected."""
        registry = RegistrySource()

        with pytest.raises(LoadError):

            @registry.migration(A)
            class Incomplete:
                @staticmethod
                def up():
                    pass

    def test_satisfies_protocol(self):
        """RegistrySource is a MigrationSource."""
        assert isinstance(RegistrySource(), MigrationSource)
