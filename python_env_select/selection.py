# -*- coding: utf-8 -*-
"""Registry of the environment selected for each project.

Stored in ~/.python-env-select/selected.txt, one tab-separated line per project:
    <project_root>\t<name>\t<interpreter_path>
"""
import os
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from filelock import FileLock

from .records import Environment

#: Registry key for selections made without a project root
GLOBAL_KEY = "-"


def _get_selection_lock_path() -> Path:
    """Return path to the selection registry lock file."""
    return Path.home() / ".python-env-select" / "selected.lock"


@contextmanager
def _selection_lock():
    """Context manager for registry file locking (thread/multiprocess safe)."""
    lock_path = _get_selection_lock_path()
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    lock = FileLock(str(lock_path))
    with lock:
        yield


def get_selection_path() -> Path:
    """Return path to the selection registry file."""
    return Path.home() / ".python-env-select" / "selected.txt"


def _project_key(project_root: Optional[str]) -> str:
    if project_root is None:
        return GLOBAL_KEY
    return os.path.abspath(os.path.expanduser(project_root))


def _read_lines() -> List[str]:
    selection_path = get_selection_path()
    if not selection_path.exists():
        return []
    with open(selection_path, "r", encoding="utf-8") as f:
        return f.readlines()


def _parse_line(line: str) -> Optional[List[str]]:
    """Split a registry line into [key, name, interpreter_path], None if not an entry."""
    stripped = line.rstrip("\n")
    if not stripped.strip() or stripped.startswith("#"):
        return None
    parts = stripped.split("\t")
    if len(parts) != 3:
        return None
    return parts


def select_environment(project_root: Optional[str], name: str, interpreter_path: str) -> None:
    """Store the selected environment for a project, replacing any previous one.

    Thread/multiprocess safe using file locking.

    Raises:
        ValueError: If a field contains a tab or line break, which the
                   registry format cannot store.
    """
    key = _project_key(project_root)
    for field in (key, name, interpreter_path):
        if any(c in field for c in "\t\r\n"):
            raise ValueError(f"Cannot store selection containing tab or newline: {field!r}")
    entry = f"{key}\t{name}\t{interpreter_path}\n"

    with _selection_lock():
        lines = _read_lines()
        new_lines = []
        replaced = False
        for line in lines:
            parts = _parse_line(line)
            if parts is not None and parts[0] == key:
                if not replaced:
                    new_lines.append(entry)
                    replaced = True
                continue
            new_lines.append(line)

        if not replaced:
            new_lines.append(entry)

        selection_path = get_selection_path()
        selection_path.parent.mkdir(parents=True, exist_ok=True)
        with open(selection_path, "w", encoding="utf-8") as f:
            f.writelines(new_lines)


def get_selected_environment(project_root: Optional[str]) -> Optional[Environment]:
    """Return the environment selected for a project, or None."""
    key = _project_key(project_root)

    with _selection_lock():
        for line in _read_lines():
            parts = _parse_line(line)
            if parts is not None and parts[0] == key:
                return Environment(name=parts[1], interpreter_path=parts[2], source="selection")
    return None


def clear_selection(project_root: Optional[str]) -> bool:
    """Remove the selection for a project.

    Returns:
        True if removed, False if nothing was selected.
    """
    key = _project_key(project_root)

    with _selection_lock():
        lines = _read_lines()
        new_lines = []
        found = False
        for line in lines:
            parts = _parse_line(line)
            if parts is not None and parts[0] == key:
                found = True
                continue
            new_lines.append(line)

        if found:
            with open(get_selection_path(), "w", encoding="utf-8") as f:
                f.writelines(new_lines)

    return found
