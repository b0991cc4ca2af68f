"""
project: mazegen
module: server.py
License: MIT

Server bootstrap: stdlib logging setup (werkzeug request lines, Flask errors)
and the development HTTP server. Generator events go through
``mazegen.logging_utils`` and are not affected by this setup.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from flask import Flask

from mazegen import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# MAZEGEN_LOG_LEVEL names mapped onto stdlib levels
_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging, and serve until interrupted."""
    app = create_app()
    log_path = _configure_logging(app)
    try:
        print(f"[INFO] Serving maze API on {host}:{port} (log file: {log_path})")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _build_handlers(log_path: str, level: int) -> list:
    formatter = logging.Formatter(LOG_FORMAT)
    rotating = RotatingFileHandler(log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
    console = logging.StreamHandler()
    for handler in (rotating, console):
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return [rotating, console]


def _configure_logging(app: Flask) -> str:
    """Send root logging to instance/app.log (rotating) and the console.

    Safe to call repeatedly: existing root handlers are replaced, not stacked.
    Returns the log file path.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, "app.log")
    level = _STDLIB_LEVELS.get(os.getenv("MAZEGEN_LOG_LEVEL", "info").strip().lower(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)
    for handler in _build_handlers(log_path, level):
        root.addHandler(handler)
    return log_path
