# -*- coding: utf-8 -*-
"""Tests for editor command dispatch."""
import os
import shutil
import tempfile

import pytest

from python_env_select.commands import (
    CommandError,
    MissingArgumentError,
    OutputSection,
    UnknownCommandError,
    complete,
    dispatch,
)
from python_env_select.manager import EnvironmentManager, render_environments

from .helpers import make_environment


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test environments."""
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def manager():
    """EnvironmentManager without external report sources."""
    return EnvironmentManager(report_sources=[])


class TestDispatch:
    """Tests for dispatch()."""

    def test_list_command(self, temp_dir, manager):
        make_environment(os.path.join(temp_dir, "a", ".venv"))
        make_environment(os.path.join(temp_dir, "b", "venv"))

        output = dispatch("pyenvlst", [], project_root=temp_dir, manager=manager)

        assert output.text == render_environments(manager.discover(temp_dir))
        assert output.text.endswith("len: 2")
        assert output.sections == [OutputSection(0, len(output.text), "Python Environments")]

    def test_list_command_without_project(self, manager):
        output = dispatch("pyenvlst", manager=manager)
        assert output.text == "======\n  ======\nlen: 0"

    @pytest.mark.parametrize("command", ["pyenvlist", "", "PYENVLST", "echo"])
    def test_unknown_command(self, command, manager):
        with pytest.raises(UnknownCommandError) as exc_info:
            dispatch(command, ["arg"], manager=manager)
        assert str(exc_info.value) == f'unknown command: "{command}"'
        assert exc_info.value.command == command

    def test_select_requires_argument(self, temp_dir, manager):
        with pytest.raises(MissingArgumentError):
            dispatch("pyenvselect", [], project_root=temp_dir, manager=manager)

    def test_select_unknown_environment(self, temp_dir, manager):
        with pytest.raises(CommandError) as exc_info:
            dispatch("pyenvselect", ["no", "such"], project_root=temp_dir, manager=manager)
        assert 'no environment named "no such"' in str(exc_info.value)

    def test_select_then_current(self, temp_dir, manager):
        python_path = make_environment(os.path.join(temp_dir, ".venv"))

        selected = dispatch("pyenvselect", [".venv"], project_root=temp_dir, manager=manager)
        current = dispatch("pyenvcur", [], project_root=temp_dir, manager=manager)

        assert python_path in selected.text
        assert selected.sections[0].label == "Selected Environment"
        assert python_path in current.text
        assert current.sections == [OutputSection(0, len(current.text), "Current Environment")]

    def test_select_joins_arguments(self, temp_dir, manager):
        make_environment(os.path.join(temp_dir, "my env"))
        output = dispatch("pyenvselect", ["my", "env"], project_root=temp_dir, manager=manager)
        assert "my env" in output.text

    def test_current_without_selection(self, temp_dir, manager):
        with pytest.raises(CommandError) as exc_info:
            dispatch("pyenvcur", [], project_root=temp_dir, manager=manager)
        assert "no environment selected" in str(exc_info.value)

    def test_output_to_dict(self, manager):
        output = dispatch("pyenvlst", manager=manager)
        assert output.to_dict() == {
            "text": output.text,
            "sections": [{"start": 0, "end": len(output.text), "label": "Python Environments"}],
        }


class TestComplete:
    """Tests for argument completion."""

    def test_select_completes_environment_names(self, temp_dir, manager):
        make_environment(os.path.join(temp_dir, ".venv"))
        assert complete("pyenvselect", [], project_root=temp_dir, manager=manager) == [".venv"]

    def test_diagnostics_are_not_completed(self, temp_dir, manager):
        missing = os.path.join(temp_dir, "missing")
        assert complete("pyenvselect", [], project_root=missing, manager=manager) == []

    @pytest.mark.parametrize("command", ["pyenvlst", "pyenvcur"])
    def test_other_commands_have_no_completions(self, command, manager):
        assert complete(command, [], manager=manager) == []

    def test_unknown_command(self, manager):
        with pytest.raises(UnknownCommandError):
            complete("bogus", manager=manager)


class TestSelectionStorage:
    """Tests for names the selection registry cannot store."""

    def test_select_name_with_tab_fails(self, temp_dir, manager):
        make_environment(os.path.join(temp_dir, "my\tenv"))

        with pytest.raises(CommandError) as exc_info:
            dispatch("pyenvselect", ["my\tenv"], project_root=temp_dir, manager=manager)

        assert "tab or newline" in str(exc_info.value)
        assert manager.current_environment(temp_dir) is None
