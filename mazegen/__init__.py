"""
project: mazegen
module: __init__.py
License: MIT

Flask application factory for the maze generation service.

The generator itself lives in ``mazegen.generator`` and has no web
dependencies; this module only wires it to HTTP. Configuration is read from
environment variables (optionally from a .env file).
"""

import os
import threading

from dotenv import load_dotenv
from flask import Flask

from mazegen.generator.config import DEFAULT_ROOM_COUNT, GeneratorConfig

__version__ = "0.1.0"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() not in {"0", "false", "no", ""}


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app serving the maze API.

    ``overrides`` is applied after environment configuration, which keeps tests
    from having to export variables.
    """
    # Load .env if present so MAZEGEN_* knobs can live next to the project
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve requests; only file logging is lost
        pass

    app.config.update(
        MAZEGEN_GENERATOR=GeneratorConfig.from_env(),
        MAZEGEN_DEFAULT_ROOMS=int(os.getenv("MAZEGEN_DEFAULT_ROOMS", str(DEFAULT_ROOM_COUNT))),
        MAZEGEN_MAX_ROOMS=int(os.getenv("MAZEGEN_MAX_ROOMS", "200")),
        # Per-axis cap on client-requested grids
        MAZEGEN_MAX_GRID=int(os.getenv("MAZEGEN_MAX_GRID", "500")),
        MAZEGEN_STRICT=_env_flag("MAZEGEN_STRICT"),
    )
    if overrides:
        app.config.update(overrides)

    # Latest published snapshot; readers only ever see a whole result
    app.extensions["mazegen"] = {"latest": None, "lock": threading.Lock()}

    from mazegen.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)
    return app


__all__ = ["__version__", "create_app"]
