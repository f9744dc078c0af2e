"""Test fakes for testing without real migrations or storage.

Example:
    from tests.fakes import A, B, RecordingUnits

    units = RecordingUnits()
    migrator = Migrator(units.source(A, B), MemoryStore())
"""

from .files import read_log, write_migration
from .stores import PreloggedStore, UnavailableStore
from .units import RecordingUnits, UnitFailure

# Chronological ids, A < B < C
A = "20230101120000-create-users"
B = "20230102120000-add-email"
C = "20230103120000-create-posts"

__all__ = [
    "A",
    "B",
    "C",
    "PreloggedStore",
    "RecordingUnits",
    "UnavailableStore",
    "UnitFailure",
    "read_log",
    "write_migration",
]
