"""Migration generation command for the migrun CLI."""

from ...core.config import Config
from ...services import generate_migration


def handle_generate(args, config: Config) -> int:
    """Handle migration:generate <name>.

    Raises:
        ValueError: If no migration name was given.
    """
    name = getattr(args, "name", None)
    if not name:
        raise ValueError("Migration name should be specified.")

    path = generate_migration(
        name,
        config.migrations_dir,
        template=config.template_path,
        pattern=config.pattern,
    )
    print(f"Migration file '{path.name}' has been created.")
    return 0
