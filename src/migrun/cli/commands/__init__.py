"""Command implementations for migrun CLI."""

from .generate import handle_generate
from .migrate import (
    attach_progress,
    handle_check,
    handle_migrate,
    handle_reset,
    handle_undo,
    handle_undo_all,
)
from .status import handle_history, handle_status

__all__ = [
    "attach_progress",
    "handle_check",
    "handle_migrate",
    "handle_status",
    "handle_history",
    "handle_undo",
    "handle_undo_all",
    "handle_reset",
    "handle_generate",
]
