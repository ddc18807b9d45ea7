import json
import os
from functools import partial

from jupyter_server.base.handlers import APIHandler
from jupyter_server.utils import url_path_join
import tornado
from tornado.ioloop import IOLoop

from .commands import CommandError, UnknownCommandError, dispatch
from .manager import EnvironmentManager, get_workspace_root, render_environments

MANAGER_SETTING = "python_env_select_manager"


def get_environment_manager(handler):
    """Get the server's EnvironmentManager.

    Falls back to a new instance when the extension did not register one
    (for testing or non-configured servers).
    """
    manager = handler.settings.get(MANAGER_SETTING)
    if isinstance(manager, EnvironmentManager):
        return manager
    return EnvironmentManager()


def get_project_root(handler):
    # Use server's root_dir setting, fall back to get_workspace_root()
    workspace = handler.settings.get("server_root_dir") or get_workspace_root()
    return os.path.expanduser(workspace)


class ListEnvironmentsHandler(APIHandler):
    """List environments discovered for the server's root directory."""

    @tornado.web.authenticated
    async def get(self):
        manager = get_environment_manager(self)
        workspace = get_project_root(self)
        # Scan and report command block, keep them off the IOLoop
        envs = await IOLoop.current().run_in_executor(None, manager.discover, workspace)

        self.finish(json.dumps({
            "environments": [env.to_dict() for env in envs],
            "text": render_environments(envs),
            "workspace_root": workspace,
        }))


class RunCommandHandler(APIHandler):
    """Run a host command (pyenvlst, pyenvselect, pyenvcur)."""

    @tornado.web.authenticated
    async def post(self, command):
        data = self.get_json_body() or {}
        if not isinstance(data, dict):
            self.set_status(400)
            self.finish(json.dumps({"error": "request body must be a JSON object"}))
            return

        args = data.get("args") or []
        if not isinstance(args, list):
            self.set_status(400)
            self.finish(json.dumps({"error": "args must be a list"}))
            return

        manager = get_environment_manager(self)
        run = partial(dispatch, command, [str(arg) for arg in args],
                      project_root=get_project_root(self), manager=manager)
        try:
            output = await IOLoop.current().run_in_executor(None, run)
        except UnknownCommandError as e:
            self.set_status(404)
            self.finish(json.dumps({"error": str(e)}))
            return
        except CommandError as e:
            self.set_status(400)
            self.finish(json.dumps({"error": str(e)}))
            return

        self.finish(json.dumps(output.to_dict()))


def setup_route_handlers(web_app):
    host_pattern = ".*$"
    base_url = web_app.settings["base_url"]

    handlers = [
        (url_path_join(base_url, "python-env-select", "environments"), ListEnvironmentsHandler),
        (url_path_join(base_url, "python-env-select", "commands", r"([^/]+)"), RunCommandHandler),
    ]

    web_app.add_handlers(host_pattern, handlers)
