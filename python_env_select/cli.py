# -*- coding: utf-8 -*-
"""CLI for python_env_select - discover and select project Python environments."""
import argparse
import json
import os
import sys
import threading
import time
from importlib.metadata import version as get_version

from .commands import (
    COMMANDS,
    CURRENT_COMMAND,
    SELECT_COMMAND,
    CommandError,
    dispatch,
)
from .manager import EnvironmentManager, get_workspace_root


class Colors:
    """ANSI color codes for terminal output."""
    GREEN = "\033[32m"
    RED = "\033[31m"
    RESET = "\033[0m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be used."""
        return sys.stdout.isatty()

    @classmethod
    def red(cls, text: str) -> str:
        return f"{cls.RED}{text}{cls.RESET}" if cls.enabled() else text

    @classmethod
    def green(cls, text: str) -> str:
        return f"{cls.GREEN}{text}{cls.RESET}" if cls.enabled() else text


class Spinner:
    """Animated spinner for long-running operations."""

    def __init__(self, message: str = "Discovering"):
        self.message = message
        self.frames = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]
        self.running = False
        self.thread = None

    def _spin(self):
        idx = 0
        while self.running:
            frame = self.frames[idx % len(self.frames)]
            sys.stderr.write(f"\r{frame} {self.message}...")
            sys.stderr.flush()
            idx += 1
            time.sleep(0.1)

    def start(self):
        # Only show spinner if stderr is a terminal
        if not sys.stderr.isatty():
            return
        self.running = True
        self.thread = threading.Thread(target=self._spin, daemon=True)
        self.thread.start()

    def stop(self):
        self.running = False
        if self.thread:
            self.thread.join(timeout=0.5)
        if sys.stderr.isatty():
            sys.stderr.write("\r" + " " * 80 + "\r")
            sys.stderr.flush()


def print_help():
    """Print rich help output."""
    print("""python-env-select - discover Python environments for a project

Usage:
  python-env-select <command> [options]

Commands:
  list                  List virtual environments under the project and conda environments
  select <target>       Select an environment by name or interpreter path
  current               Show the environment selected for the project
  command <name> [args] Run an editor command (pyenvlst, pyenvselect, pyenvcur)

Options:
  --path PATH           Project directory (default: workspace root)
  list --json           Output records in JSON format

Notes:
  - virtual environments are directories with bin/activate or pyvenv.cfg
    and a bin/python interpreter
  - conda environments come from 'conda info --envs' and are skipped
    silently when conda is not installed
  - directories that cannot be read are listed with an empty path

Examples:
  python-env-select list
  python-env-select list --path /path/to/project --json
  python-env-select select .venv
  python-env-select current
""")


def _project_root(args) -> str:
    if args.path:
        return os.path.abspath(os.path.expanduser(args.path))
    return get_workspace_root()


def _fail(message: str):
    print(Colors.red(f"Error: {message}"), file=sys.stderr)
    sys.exit(1)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="python-env-select",
        description="Discover and select Python environments for a project.",
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show this help message",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List discovered environments",
    )
    list_parser.add_argument(
        "--path",
        default=None,
        help="Project directory to scan (default: workspace root)",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # select command
    select_parser = subparsers.add_parser(
        "select",
        help="Select an environment for the project",
    )
    select_parser.add_argument(
        "target",
        nargs="*",
        help="Environment name or interpreter path",
    )
    select_parser.add_argument(
        "--path",
        default=None,
        help="Project directory (default: workspace root)",
    )

    # current command
    current_parser = subparsers.add_parser(
        "current",
        help="Show the environment selected for the project",
    )
    current_parser.add_argument(
        "--path",
        default=None,
        help="Project directory (default: workspace root)",
    )

    # command: raw editor command dispatch
    command_parser = subparsers.add_parser(
        "command",
        help="Run an editor command by name",
    )
    command_parser.add_argument(
        "name",
        help=f"Command name ({', '.join(COMMANDS)})",
    )
    command_parser.add_argument(
        "args",
        nargs="*",
        help="Command arguments",
    )
    command_parser.add_argument(
        "--path",
        default=None,
        help="Project directory (default: workspace root)",
    )

    args = parser.parse_args(argv)

    if args.version:
        print(f"python-env-select {get_version('python-env-select')}")
        sys.exit(0)

    if args.help or args.command is None:
        print_help()
        sys.exit(0)

    manager = EnvironmentManager()
    project_root = _project_root(args)

    if args.command == "list":
        json_output = getattr(args, 'json', False)

        # No spinner for JSON output (machine-to-machine)
        spinner = None if json_output else Spinner(f"Discovering environments in {project_root}")
        if spinner:
            spinner.start()
        try:
            envs = manager.discover(project_root)
        finally:
            if spinner:
                spinner.stop()

        if json_output:
            print(json.dumps({
                "environments": [env.to_dict() for env in envs],
                "workspace_root": project_root,
            }, indent=2))
        else:
            print(manager.render(envs))

    elif args.command in ("select", "current", "command"):
        if args.command == "select":
            name, command_args = SELECT_COMMAND, args.target
        elif args.command == "current":
            name, command_args = CURRENT_COMMAND, []
        else:
            name, command_args = args.name, args.args

        try:
            output = dispatch(name, command_args, project_root=project_root, manager=manager)
        except CommandError as e:
            _fail(str(e))

        if name == SELECT_COMMAND:
            print(Colors.green("Selected:"))
        print(output.text)

    else:
        print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
