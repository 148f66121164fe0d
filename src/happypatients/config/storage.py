"""Treatment store location."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "happypatients"
DEFAULT_DB_FILENAME: Final[str] = "happypatients.db"
DATA_DIR_ENV_VAR: Final[str] = "HAPPYPATIENTS_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection target of the durable store.

    ``data_dir`` is only set when ``uri`` points at the default SQLite file.
    """

    uri: str
    data_dir: Path | None = None


def default_data_dir() -> Path:
    """Per-user data directory: ``HAPPYPATIENTS_DATA_DIR``, else the platform default."""

    override = os.getenv(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
    else:
        root = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return (Path(root) / APP_DIR_NAME).expanduser().resolve()


def get_database_config() -> DatabaseConfig:
    """Use ``DATABASE_URI`` when given, otherwise a SQLite file in the data directory.

    The data directory is created on demand.
    """

    explicit = os.getenv(DATABASE_URI_ENV_VAR)
    if explicit:
        return DatabaseConfig(uri=explicit)
    data_dir = default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig(
        uri=f"sqlite+pysqlite:///{data_dir / DEFAULT_DB_FILENAME}",
        data_dir=data_dir,
    )


def get_database_uri() -> str:
    return get_database_config().uri
