"""Where the catalog database and the HTTP cache live."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "kunrecon"
DEFAULT_DB_FILENAME: Final[str] = "catalog.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local files of the application, all under one data directory."""

    data_dir: Path

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def file_path(self, filename: str, *, ensure: bool = True) -> Path:
        directory = self.resolve_data_dir()
        if ensure:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / filename

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        return self.file_path(HTTP_CACHE_FILENAME, ensure=ensure)

    def local_catalog_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.file_path(DEFAULT_DB_FILENAME)}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection to the catalog. Usually the shared catalog server via ``DATABASE_URI``."""

    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = optional_env_var("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = optional_env_var("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    override = optional_env_var("KUNRECON_DATA_DIR")
    if override is not None:
        return StorageConfig(data_dir=Path(override))
    return StorageConfig(data_dir=(_platform_data_home() / APP_DIR_NAME).expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        # Fall back to a local SQLite file, handy for a catalog export.
        uri = (storage or get_storage_config()).local_catalog_uri()
    return DatabaseConfig(uri=uri)


def get_http_cache_path() -> Path:
    return get_storage_config().http_cache_path()
