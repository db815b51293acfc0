"""Tests for database path resolution."""

from smbtax.database.factories import DB_PATH_ENV, resolve_database_path


def test_explicit_path_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "env.db"))

    assert resolve_database_path(str(tmp_path / "explicit.db")) == tmp_path / "explicit.db"


def test_environment_variable(tmp_path, monkeypatch):
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "env.db"))

    assert resolve_database_path() == tmp_path / "env.db"


def test_default_under_home(tmp_path, monkeypatch):
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    path = resolve_database_path()

    assert path == tmp_path / ".smbtax" / "smbtax.db"
    assert path.parent.is_dir()


def test_creates_missing_parent(tmp_path):
    path = resolve_database_path(str(tmp_path / "nested" / "dir" / "ledger.db"))
    assert path.parent.is_dir()
