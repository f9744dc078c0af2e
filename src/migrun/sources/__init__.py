"""Migration sources for migrun.

A source discovers migration units and returns them ordered by id.
"""

from .base import MigrationSource
from .filesystem import FileSystemSource
from .registry import RegistrySource

__all__ = [
    "MigrationSource",
    "FileSystemSource",
    "RegistrySource",
]
