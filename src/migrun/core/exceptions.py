"""Custom exceptions for migrun."""


class MigrunError(Exception):
    """Base exception for all migrun errors."""

    pass


class LoadError(MigrunError):
    """Migration definitions could not be loaded."""

    pass


class StoreError(MigrunError):
    """Execution state store operation failed."""

    pass


class RecordExistsError(StoreError):
    """Execution record already exists for the migration."""

    def __init__(self, migration_id: str):
        self.migration_id = migration_id
        super().__init__(f"Migration '{migration_id}' is already logged as executed")


class RecordMissingError(StoreError):
    """No execution record exists for the migration."""

    def __init__(self, migration_id: str):
        self.migration_id = migration_id
        super().__init__(f"Migration '{migration_id}' is not logged as executed")


class NotFoundError(MigrunError):
    """Requested migration is not present in the relevant set."""

    pass


class UnitExecutionError(MigrunError):
    """A migration's own up or down operation raised."""

    def __init__(
        self,
        migration_id: str,
        direction: str,
        reason: str,
        completed: list[str] | None = None,
    ):
        """Initialize exception with the failing migration.

        Args:
            migration_id: Id of the migration that failed.
            direction: "up" or "down".
            reason: Message of the underlying error.
            completed: Ids processed successfully before the failure.
        """
        self.migration_id = migration_id
        self.direction = direction
        self.reason = reason
        self.completed = completed or []
        super().__init__(f"Migration '{migration_id}' failed ({direction}): {reason}")
