# -*- coding: utf-8 -*-
"""Environment discovery for a project.

Combines virtual environments found under the project root with
environments reported by external managers (conda).
"""
import os
from typing import List, Optional, Sequence, Union

from traitlets import Bool, Float, List as ListTrait, Unicode
from traitlets.config import LoggingConfigurable

from .records import Diagnostic, Environment
from .scanner import scan_directory
from .selection import (
    clear_selection,
    get_selected_environment,
    select_environment as _select_environment,
)
from .sources import CondaReportSource, ReportSource, ReportSourceError

Record = Union[Environment, Diagnostic]


def get_workspace_root():
    """Get the workspace/project root directory.

    Reads from environment variables:
    1. JUPYTER_SERVER_ROOT environment variable
    2. JUPYTERHUB_ROOT_DIR environment variable
    3. Falls back to current working directory
    """
    for var in ['JUPYTER_SERVER_ROOT', 'JUPYTERHUB_ROOT_DIR']:
        root = os.environ.get(var)
        if root and os.path.isdir(root):
            return os.path.abspath(root)
    return os.getcwd()


def render_environments(environments: Sequence[Record]) -> str:
    """Render records as an aligned two-column block.

    Names are left-aligned to the longest name; diagnostics have an empty
    path column. The block is wrapped in a banner and followed by a count.
    """
    max_name_length = max((len(env.name) for env in environments), default=0)

    formatted_envs = [
        f"{env.name.ljust(max_name_length)}    {env.interpreter_path or ''}"
        for env in environments
    ]

    text = "\n".join(formatted_envs)
    text = f"======\n {text} ======"
    return f"{text}\nlen: {len(environments)}"


class EnvironmentManager(LoggingConfigurable):
    """Discovers the Python environments available to a project.

    Combines:
    - Virtual environments nested under the project root (marker scan)
    - Environments reported by external managers (conda info --envs)
    """

    report_command = ListTrait(
        Unicode(),
        default_value=list(CondaReportSource.default_command),
        config=True,
        help="Command listing conda-style environments, e.g. ['mamba', 'info', '--envs']."
    )

    report_timeout = Float(
        None,
        config=True,
        allow_none=True,
        help="Seconds to wait for the report command. None waits until it exits."
    )

    scan_project = Bool(
        True,
        config=True,
        help="Scan the project root for virtual environments."
    )

    def __init__(self, report_sources: Optional[List[ReportSource]] = None, **kwargs):
        super(EnvironmentManager, self).__init__(**kwargs)
        if report_sources is None:
            report_sources = [CondaReportSource(self.report_command, timeout=self.report_timeout)]
        self.report_sources = report_sources

    def _read_source(self, source: ReportSource) -> List[Environment]:
        try:
            output = source.read_report()
        except ReportSourceError as e:
            self.log.debug("Report source %r unavailable: %s", source.name, e)
            return []
        return source.parse_report(output)

    def discover(self, project_root: Optional[str] = None) -> List[Record]:
        """Discover environments for a project.

        Args:
            project_root: Directory to scan. If None, only report sources are used.

        Returns:
            Scanned records followed by each report source's environments.
            No deduplication or sorting is applied.
        """
        environments = []

        if project_root is not None and self.scan_project:
            environments.extend(scan_directory(project_root))

        for source in self.report_sources:
            environments.extend(self._read_source(source))

        self.log.debug("Discovered %d environment records", len(environments))
        return environments

    def render(self, environments: Sequence[Record]) -> str:
        return render_environments(environments)

    def find_environment(self, target: str, project_root: Optional[str] = None) -> Optional[Environment]:
        """Find a selectable environment by name or interpreter path.

        Returns the first match in discovery order, or None.
        """
        for env in self.discover(project_root):
            if env.selectable and target in (env.name, env.interpreter_path):
                return env
        return None

    def select_environment(self, target: str, project_root: Optional[str] = None) -> Optional[Environment]:
        """Select an environment for a project and persist the choice.

        Returns:
            The selected Environment, or None if target was not found.

        Raises:
            ValueError: If the environment cannot be stored in the selection registry.
        """
        env = self.find_environment(target, project_root)
        if env is None:
            return None
        _select_environment(project_root, env.name, env.interpreter_path)
        self.log.info("Selected environment %s (%s)", env.name, env.interpreter_path)
        return env

    def current_environment(self, project_root: Optional[str] = None) -> Optional[Environment]:
        """Return the environment selected for a project, or None."""
        return get_selected_environment(project_root)

    def clear_selection(self, project_root: Optional[str] = None) -> bool:
        """Forget the environment selected for a project."""
        return clear_selection(project_root)
