"""Location of the per-user configuration directory."""

from __future__ import annotations

import os
from pathlib import Path


def _home_directory() -> str | None:
    home = os.environ.get("HOME")
    if home:
        return home
    try:
        import pwd

        return pwd.getpwuid(os.getuid()).pw_dir
    except (ImportError, KeyError, AttributeError):
        return None


def get_config_path() -> Path:
    """Return ``~/.config/task-manager``, creating it if needed."""
    home = _home_directory()
    if not home:
        raise RuntimeError("Cannot determine home directory")
    path = Path(home) / ".config" / "task-manager"
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(f"Failed to create directory: {path}") from exc
    return path