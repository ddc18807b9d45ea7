import pytest

pytest_plugins = ("pytest_jupyter.jupyter_server",)


@pytest.fixture
def jp_server_config(jp_server_config):
    return {
        "ServerApp": {"jpserver_extensions": {"python_env_select": True}},
        # Keep route tests independent of any conda installed on the machine
        "EnvironmentManager": {"report_command": ["python-env-select-missing-tool", "info", "--envs"]},
    }


@pytest.fixture(autouse=True)
def home_dir(tmp_path, monkeypatch):
    """Point HOME at a temporary directory so the selection registry is isolated."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
