"""CLI entry point for migrun."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands

TASKS_HELP = "\n".join(
    [
        "Available tasks:",
        "  - db:migrate:check - Exit with status 1 if there are pending migrations",
        "  - db:migrate [destination] - Execute all pending migrations [up to specified one]",
        "  - db:migrate:status - Show all pending migrations",
        "  - db:migrate:history - Show all executed migrations",
        "  - db:migrate:undo [destination] - Undo last executed migration or all down to destination if specified",
        "  - db:migrate:undo:all - Undo all executed migrations",
        "  - db:reset - Undo all executed migrations and then execute them again",
        "  - migration:generate <migration name> - Create a new empty migration file",
    ]
)

HANDLERS = {
    "db:migrate:check": commands.handle_check,
    "db:migrate": commands.handle_migrate,
    "db:migrate:status": commands.handle_status,
    "db:migrate:history": commands.handle_history,
    "db:migrate:undo": commands.handle_undo,
    "db:migrate:undo:all": commands.handle_undo_all,
    "db:reset": commands.handle_reset,
    "migration:generate": commands.handle_generate,
}


class TaskParser(argparse.ArgumentParser):
    """Argument parser that prints usage to stdout and exits 1 on errors."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stdout)
        print(f"Error: {message}")
        sys.exit(1)


def create_parser() -> TaskParser:
    """Create the argument parser with all tasks."""
    parser = TaskParser(
        prog="migrun",
        description="Run ordered up/down migrations",
        epilog=TASKS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to a migrun.toml file"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=False, metavar="task")

    subparsers.add_parser("db:migrate:check", help="Fail if migrations are pending")

    migrate_parser = subparsers.add_parser("db:migrate", help="Execute pending migrations")
    migrate_parser.add_argument(
        "destination", nargs="?", default=None, help="Last migration to execute"
    )

    subparsers.add_parser("db:migrate:status", help="Show pending migrations")
    subparsers.add_parser("db:migrate:history", help="Show executed migrations")

    undo_parser = subparsers.add_parser("db:migrate:undo", help="Undo migrations")
    undo_parser.add_argument(
        "destination", nargs="?", default=None, help="Last migration to undo"
    )

    subparsers.add_parser("db:migrate:undo:all", help="Undo all executed migrations")
    subparsers.add_parser("db:reset", help="Undo all migrations, then execute them again")

    generate_parser = subparsers.add_parser(
        "migration:generate", help="Create a new empty migration file"
    )
    generate_parser.add_argument(
        "name", nargs="?", default=None, help="Migration name (use dashes between words)"
    )

    return parser


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args, extra = parser.parse_known_args(argv)

    try:
        config = Config.from_env_or_file(args.config)
        _configure_logging("DEBUG" if args.verbose else config.log_level)
        if extra:
            logger.debug(f"Ignoring extra arguments: {' '.join(extra)}")

        handler = HANDLERS.get(args.command)
        if handler is None:
            parser.print_help(sys.stdout)
            sys.exit(0)

        sys.exit(handler(args, config))
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
