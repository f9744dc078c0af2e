"""Configuration management for migrun."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_PATTERN = r"^\d{14}-[\w.-]+\.py$"
DEFAULT_CONFIG_FILE = "migrun.toml"


def _default_migrations_dir() -> Path:
    """Get default migrations directory."""
    return Path.cwd() / "migrations"


@dataclass
class StoreConfig:
    """Execution state store configuration.

    Attributes:
        backend: One of "json", "sqlite", "sqlalchemy", "memory".
        path: File used by the json and sqlite backends. Defaults to
            ``.migrun.json`` / ``.migrun.db`` inside the migrations directory.
        url: SQLAlchemy database URL for the sqlalchemy backend.
        table: Table holding execution records (sqlite, sqlalchemy).
    """

    backend: str = "json"
    path: Path | None = None
    url: str | None = None
    table: str = "migrations_meta"


@dataclass
class Config:
    """Main application configuration."""

    migrations_dir: Path = field(default_factory=_default_migrations_dir)
    template_path: Path | None = None
    pattern: str = DEFAULT_PATTERN
    log_level: str = "WARNING"
    store: StoreConfig = field(default_factory=StoreConfig)

    def store_path(self) -> Path:
        """Resolve the file path used by file-backed stores."""
        if self.store.path is not None:
            return self.store.path
        suffix = ".db" if self.store.backend == "sqlite" else ".json"
        return self.migrations_dir / f".migrun{suffix}"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Relative paths in the file are resolved against the file's directory.
        """
        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()
        config._apply_mapping(data, Path(path).parent)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | None = None) -> "Config":
        """Load from an explicit file, ``MIGRUN_CONFIG``, ``./migrun.toml`` or env."""
        if path is None:
            if env_path := os.environ.get("MIGRUN_CONFIG"):
                path = Path(env_path)
            elif (Path.cwd() / DEFAULT_CONFIG_FILE).exists():
                path = Path.cwd() / DEFAULT_CONFIG_FILE

        if path is not None:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_mapping(self, data: dict[str, Any], base_dir: Path) -> None:
        if "migrations_dir" in data:
            self.migrations_dir = base_dir / data["migrations_dir"]
        if "template_path" in data:
            self.template_path = base_dir / data["template_path"]
        if "pattern" in data:
            self.pattern = data["pattern"]
        if "log_level" in data:
            self.log_level = data["log_level"]

        store = data.get("store", {})
        if "backend" in store:
            self.store.backend = store["backend"]
        if "path" in store:
            self.store.path = base_dir / store["path"]
        if "url" in store:
            self.store.url = store["url"]
        if "table" in store:
            self.store.table = store["table"]

    def _apply_env(self) -> None:
        if path := os.environ.get("MIGRUN_MIGRATIONS_DIR"):
            self.migrations_dir = Path(path)
        if path := os.environ.get("MIGRUN_TEMPLATE"):
            self.template_path = Path(path)
        if pattern := os.environ.get("MIGRUN_PATTERN"):
            self.pattern = pattern
        if level := os.environ.get("MIGRUN_LOG_LEVEL"):
            self.log_level = level

        # Store configuration
        if backend := os.environ.get("MIGRUN_STORE"):
            self.store.backend = backend
        if path := os.environ.get("MIGRUN_STORE_PATH"):
            self.store.path = Path(path)
        if url := os.environ.get("MIGRUN_DATABASE_URL"):
            self.store.url = url
        if table := os.environ.get("MIGRUN_TABLE"):
            self.store.table = table
