from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from happypatients.config import storage


def test_default_data_dir_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("HAPPYPATIENTS_DATA_DIR", str(custom))

    assert storage.default_data_dir() == custom.resolve()


def test_default_data_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("HAPPYPATIENTS_DATA_DIR", raising=False)
    monkeypatch.setattr(storage.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    assert storage.default_data_dir() == (tmp_path / "xdg" / "happypatients").resolve()


def test_database_uri_override_leaves_data_dir_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    config = storage.get_database_config()

    assert config.uri == "sqlite:///override.db"
    assert config.data_dir is None
    assert storage.get_database_uri() == "sqlite:///override.db"


def test_default_database_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("HAPPYPATIENTS_DATA_DIR", str(tmp_path / "data-dir"))

    config = storage.get_database_config()

    expected_path = (tmp_path / "data-dir" / storage.DEFAULT_DB_FILENAME).resolve()
    assert config.uri == f"sqlite+pysqlite:///{expected_path}"
    assert config.data_dir == expected_path.parent
    assert expected_path.parent.exists()
