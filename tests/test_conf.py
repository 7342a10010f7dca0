import pwd
from types import SimpleNamespace

import pytest

from cronat.conf import get_config_path


def test_uses_home_and_creates_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    path = get_config_path()
    assert path == tmp_path / ".config" / "task-manager"
    assert path.is_dir()


def test_existing_directory_is_fine(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    first = get_config_path()
    second = get_config_path()
    assert first == second


def test_falls_back_to_password_database(tmp_path, monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    monkeypatch.setattr(pwd, "getpwuid", lambda uid: SimpleNamespace(pw_dir=str(tmp_path)))
    assert get_config_path() == tmp_path / ".config" / "task-manager"


def test_fails_when_home_is_a_file(tmp_path, monkeypatch):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setenv("HOME", str(blocker))
    with pytest.raises(RuntimeError, match="Failed to create directory"):
        get_config_path()