"""Describe the migration."""


async def up():
    """Apply the migration."""


async def down():
    """Revert the migration."""
