"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from migrun.core.config import Config
from migrun.services import Migrator
from migrun.store import MemoryStore
from tests.fakes import A, B, C, RecordingUnits


@pytest.fixture
def units() -> RecordingUnits:
    """Provide a recorder for migration unit calls."""
    return RecordingUnits()


@pytest.fixture
def store() -> MemoryStore:
    """Provide an empty in-memory state store."""
    return MemoryStore()


@pytest.fixture
def migrator(units: RecordingUnits, store: MemoryStore) -> Migrator:
    """Provide a Migrator over three recording units A < B < C."""
    return Migrator(units.source(C, A, B), store)


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty migrations directory."""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def config(migrations_dir: Path) -> Config:
    """Provide a Config pointing at the temporary migrations directory."""
    cfg = Config()
    cfg.migrations_dir = migrations_dir
    return cfg
