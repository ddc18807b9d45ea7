# -*- coding: utf-8 -*-
"""Editor command surface for environment discovery.

Maps the host's command names to discovery calls and packages the result as
text plus labelled sections covering it.
"""
from typing import List, NamedTuple, Optional, Sequence

from .manager import EnvironmentManager, render_environments

LIST_COMMAND = "pyenvlst"
SELECT_COMMAND = "pyenvselect"
CURRENT_COMMAND = "pyenvcur"

COMMANDS = (CURRENT_COMMAND, LIST_COMMAND, SELECT_COMMAND)


class CommandError(ValueError):
    """A command failed; the message is shown to the user."""


class UnknownCommandError(CommandError):
    def __init__(self, command: str):
        super().__init__(f'unknown command: "{command}"')
        self.command = command


class MissingArgumentError(CommandError):
    """A command was run without its required argument."""


class OutputSection(NamedTuple):
    start: int
    end: int
    label: str


class CommandOutput(NamedTuple):
    text: str
    sections: List[OutputSection]

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "sections": [section._asdict() for section in self.sections],
        }


def _output(text: str, label: str) -> CommandOutput:
    return CommandOutput(text=text, sections=[OutputSection(0, len(text), label)])


def _list(manager, args, project_root):
    environments = manager.discover(project_root)
    return _output(render_environments(environments), "Python Environments")


def _select(manager, args, project_root):
    if not args:
        raise MissingArgumentError("nothing to select")
    target = " ".join(args)
    try:
        env = manager.select_environment(target, project_root)
    except ValueError as e:
        raise CommandError(str(e)) from e
    if env is None:
        raise CommandError(f'no environment named "{target}"')
    return _output(render_environments([env]), "Selected Environment")


def _current(manager, args, project_root):
    env = manager.current_environment(project_root)
    if env is None:
        raise CommandError("no environment selected")
    return _output(render_environments([env]), "Current Environment")


_HANDLERS = {
    LIST_COMMAND: _list,
    SELECT_COMMAND: _select,
    CURRENT_COMMAND: _current,
}


def dispatch(command: str, args: Sequence[str] = (), project_root: Optional[str] = None,
             manager: Optional[EnvironmentManager] = None) -> CommandOutput:
    """Run a host command.

    Args:
        command: Command name (pyenvlst, pyenvselect, pyenvcur)
        args: Command arguments
        project_root: Project directory, None when the host has no project open
        manager: Manager to use, a default one is created if None

    Raises:
        UnknownCommandError: If command is not a known command name.
        CommandError: If the command cannot produce output.
    """
    handler = _HANDLERS.get(command)
    if handler is None:
        raise UnknownCommandError(command)
    if manager is None:
        manager = EnvironmentManager()
    return handler(manager, list(args), project_root)


def complete(command: str, args: Sequence[str] = (), project_root: Optional[str] = None,
             manager: Optional[EnvironmentManager] = None) -> List[str]:
    """Return argument completions for a host command.

    Only pyenvselect completes, with the names of selectable environments.
    """
    if command not in _HANDLERS:
        raise UnknownCommandError(command)
    if command != SELECT_COMMAND:
        return []
    if manager is None:
        manager = EnvironmentManager()
    return [env.name for env in manager.discover(project_root) if env.selectable]
