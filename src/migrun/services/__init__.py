"""Services for migrun: the migration engine and its collaborators."""

from .container import ServiceContainer
from .events import EventNotifier
from .generator import generate_migration
from .migrator import ALL, Migrator

__all__ = [
    "ALL",
    "EventNotifier",
    "Migrator",
    "ServiceContainer",
    "generate_migration",
]
