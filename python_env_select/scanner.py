# -*- coding: utf-8 -*-
"""Filesystem scan for virtual environments.

A directory is an environment root if it holds bin/activate or pyvenv.cfg.
Its interpreter is bin/python; environments without one are skipped.
"""
import os
from typing import List, Optional, Union

from .records import Diagnostic, Environment


def is_environment(path: str) -> bool:
    """Check if path looks like a virtual environment root.

    Pure existence checks, file contents are not validated.
    """
    activate_script = os.path.join(path, "bin", "activate")
    pyvenv_cfg = os.path.join(path, "pyvenv.cfg")
    return os.path.exists(activate_script) or os.path.exists(pyvenv_cfg)


def resolve_interpreter(env_path: str) -> Optional[str]:
    """Return env_path/bin/python if it exists, None otherwise."""
    python_path = os.path.join(env_path, "bin", "python")
    if os.path.exists(python_path):
        return python_path
    return None


def _list_subdirectories(path: str) -> List[str]:
    """List real (non-symlinked) subdirectories of path in listing order.

    Raises:
        OSError: If the directory cannot be listed.
    """
    subdirs = []
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
            except OSError:
                # Entry vanished or cannot be stat'ed, not a directory we can use
                continue
    return subdirs


def scan_directory(root_path: str) -> List[Union[Environment, Diagnostic]]:
    """Scan directory tree for virtual environments.

    Walks the tree depth-first in directory listing order. Environments are
    not descended into. Directories that cannot be listed produce a
    Diagnostic record and the walk continues with their siblings.

    Args:
        root_path: Directory to start scanning from

    Returns:
        List of Environment and Diagnostic records in discovery order.
    """
    results = []

    # Work list of (path, is_root). Children are pushed reversed so they pop
    # in listing order, which keeps the output in depth-first pre-order.
    pending = [(root_path, True)]
    while pending:
        current_path, is_root = pending.pop()

        if not is_root and is_environment(current_path):
            python_path = resolve_interpreter(current_path)
            if python_path is not None:
                results.append(Environment(
                    name=os.path.basename(current_path),
                    interpreter_path=python_path,
                    source="venv",
                ))
            # Don't recurse into environments
            continue

        try:
            subdirs = _list_subdirectories(current_path)
        except OSError as e:
            results.append(Diagnostic(f"Error reading directory ({current_path}): {e}"))
            continue

        for subdir in reversed(subdirs):
            pending.append((subdir, False))

    return results
