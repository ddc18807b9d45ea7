try:
    from ._version import __version__
except ImportError:
    # Fallback when using the package in dev mode without installing
    # in editable mode with pip. It is highly recommended to install
    # the package from a stable release or in editable mode: https://pip.pypa.io/en/stable/topics/local-project-installs/#editable-installs
    import warnings
    warnings.warn("Importing 'python_env_select' outside a proper installation.")
    __version__ = "dev"

from .manager import EnvironmentManager, render_environments
from .records import Diagnostic, Environment
from .routes import MANAGER_SETTING, setup_route_handlers


def _jupyter_server_extension_points():
    return [{
        "module": "python_env_select"
    }]


def _load_jupyter_server_extension(server_app):
    """Registers the API handlers and the shared EnvironmentManager.

    Parameters
    ----------
    server_app: jupyterlab.labapp.LabApp
        JupyterLab application instance
    """
    log = server_app.log
    name = "python_env_select"

    log.info(f"{name} | Loading server extension...")

    # Parent the manager on the server so c.EnvironmentManager.* config applies
    manager = EnvironmentManager(parent=server_app)
    server_app.web_app.settings[MANAGER_SETTING] = manager
    log.debug(f"{name} | Report command: {' '.join(manager.report_command)}")

    setup_route_handlers(server_app.web_app)
    log.debug(f"{name} | Route handlers registered")

    log.info(f"{name} | Server extension loaded successfully")
