# -*- coding: utf-8 -*-
"""Records produced by environment discovery.

A discovery run yields a flat list mixing two kinds of records:
- Environment: a usable environment with a resolved interpreter
- Diagnostic: a directory that could not be read during the scan
"""
from typing import NamedTuple, Optional


class Environment(NamedTuple):
    """A discovered environment with a resolved interpreter."""

    name: str
    interpreter_path: str
    source: str = "venv"

    @property
    def selectable(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "interpreter_path": self.interpreter_path,
            "source": self.source,
            "selectable": True,
        }


class Diagnostic(NamedTuple):
    """A scan failure, shown in listings but never selectable."""

    message: str

    @property
    def name(self) -> str:
        return self.message

    @property
    def interpreter_path(self) -> Optional[str]:
        return None

    @property
    def source(self) -> str:
        return "diagnostic"

    @property
    def selectable(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "name": self.message,
            "interpreter_path": None,
            "source": self.source,
            "selectable": False,
        }
