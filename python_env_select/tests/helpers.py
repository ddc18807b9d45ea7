# -*- coding: utf-8 -*-
"""Helpers for building fake environment trees in tests."""
import os


def make_environment(path, marker="pyvenv.cfg", with_python=True):
    """Create a minimal virtual environment layout at path.

    Args:
        path: Environment root to create
        marker: "pyvenv.cfg" or "activate"
        with_python: Create bin/python

    Returns:
        Path of bin/python (whether or not it was created).
    """
    bin_dir = os.path.join(path, "bin")
    os.makedirs(bin_dir, exist_ok=True)

    if marker == "pyvenv.cfg":
        with open(os.path.join(path, "pyvenv.cfg"), "w") as f:
            f.write("home = /usr/bin\n")
    else:
        with open(os.path.join(bin_dir, "activate"), "w") as f:
            f.write("# activate\n")

    python_path = os.path.join(bin_dir, "python")
    if with_python:
        with open(python_path, "w") as f:
            f.write("")
    return python_path
