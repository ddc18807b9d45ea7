# -*- coding: utf-8 -*-
"""Report sources for environments tracked by external environment managers.

A report source runs a manager's listing command and parses its text output
into Environment records. Conda's `conda info --envs` is the built-in source;
other managers with a similar listing can be added as ReportSource subclasses.
"""
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from .records import Environment
from .scanner import resolve_interpreter


class ReportSourceError(RuntimeError):
    """Raised when an environment manager's report cannot be obtained."""


def parse_environment_report(output: str, source: str = "conda") -> List[Environment]:
    """Parse a tabular environment listing.

    Expected layout:
        # header lines starting with '#'
        <boundary line, discarded>
        <name> <path> [extra columns ignored]

    Lines with fewer than two columns are dropped, as are environments whose
    path has no bin/python.

    Args:
        output: Raw listing text
        source: Source name stored on the returned records

    Returns:
        List of Environment records in listing order.
    """
    environments = []
    lines = iter(output.splitlines())

    # Skip header lines; the first non-header line is the boundary and is dropped too
    for line in lines:
        if not line.startswith("#"):
            break

    for line in lines:
        parts = line.split()
        if len(parts) < 2:
            continue
        python_path = resolve_interpreter(parts[1])
        if python_path is not None:
            environments.append(Environment(
                name=parts[0],
                interpreter_path=python_path,
                source=source,
            ))

    return environments


class ReportSource(ABC):
    """An external tool that reports named environments."""

    #: Source name stored on discovered records
    name = "external"

    @abstractmethod
    def read_report(self) -> str:
        """Return the raw environment report.

        Raises:
            ReportSourceError: If the report cannot be obtained.
        """

    @abstractmethod
    def parse_report(self, output: str) -> List[Environment]:
        """Parse a raw report into Environment records. Never raises."""


class CommandReportSource(ReportSource):
    """Report source backed by a command whose stdout is the report."""

    def __init__(self, command: List[str], timeout: Optional[float] = None):
        self.command = list(command)
        self.timeout = timeout

    def read_report(self) -> str:
        if not self.command:
            raise ReportSourceError("No report command configured")

        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ReportSourceError(f"Failed to execute command: {e}") from e

        if result.returncode != 0:
            raise ReportSourceError(
                f"Command executed with failing error code: {result.stderr.strip()}"
            )
        return result.stdout

    def parse_report(self, output: str) -> List[Environment]:
        return parse_environment_report(output, source=self.name)


class CondaReportSource(CommandReportSource):
    """Environments listed by `conda info --envs`."""

    name = "conda"
    default_command = ["conda", "info", "--envs"]

    def __init__(self, command: Optional[List[str]] = None, timeout: Optional[float] = None):
        if command is None:
            command = self.default_command
        super().__init__(command, timeout=timeout)
