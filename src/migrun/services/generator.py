"""Migration file generation from a template."""

from __future__ import annotations

import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from migrun.core.config import DEFAULT_PATTERN
from migrun.core.exceptions import LoadError

TEMPLATE_NAME = "migration.sample.py"
BUNDLED_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / TEMPLATE_NAME


def format_timestamp(moment: datetime) -> str:
    """Format a moment as a 14-digit UTC timestamp (YYYYMMDDHHMMSS)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y%m%d%H%M%S")


def resolve_template(directory: Path, template: Path | None = None) -> Path:
    """Pick the template to copy.

    An explicit template wins, then ``migration.sample.py`` in the
    migrations directory, then the template bundled with migrun.

    Raises:
        LoadError: If an explicit template does not exist.
    """
    if template is not None:
        if not template.is_file():
            raise LoadError(f"Migration template not found: {template}")
        return template

    local = directory / TEMPLATE_NAME
    if local.is_file():
        return local
    return BUNDLED_TEMPLATE


def generate_migration(
    name: str,
    directory: Path,
    template: Path | None = None,
    now: datetime | None = None,
    pattern: str = DEFAULT_PATTERN,
) -> Path:
    """Create a new, empty migration file.

    The file is named ``<UTC timestamp>-<name>.py`` and is a verbatim copy
    of the template.

    Args:
        name: Migration name (use dashes to separate words).
        directory: Directory the migration is written to.
        template: Template file to copy. See resolve_template().
        now: Creation time, defaults to the current UTC time.
        pattern: Loader file name pattern the new file must match.

    Returns:
        Path of the created file.

    Raises:
        ValueError: If the name is empty, or the resulting file name would
            not be picked up by the loader.
        FileExistsError: If the target file already exists.
        LoadError: If the template cannot be found.
    """
    if not name:
        raise ValueError("Migration name should be specified.")

    source = resolve_template(directory, template)
    timestamp = format_timestamp(now or datetime.now(timezone.utc))
    target = directory / f"{timestamp}-{name}.py"
    if not re.match(pattern, target.name):
        raise ValueError(
            f"Migration file name '{target.name}' does not match pattern {pattern!r}"
        )

    if target.exists():
        raise FileExistsError(f"Migration file '{target.name}' already exists")

    directory.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    logger.debug(f"Copied {source} to {target}")
    return target
