"""Minimal structured logging helper.

Each event is printed as one line of key=value pairs (or one JSON object per
line) stamped with level and unix time, so generator events stay grep-able
without configuring handlers.

Usage:
    from mazegen.logging_utils import get_logger
    log = get_logger("mazegen.pipeline")
    log.info(event="maze_generated", rooms=5, seed=42)

    req_log = log.bind(route="/api/maze")   # context repeated on every line
    req_log.debug(event="param_parsed", rooms=5)

Level and format come from MAZEGEN_LOG_LEVEL (debug/info/warn/error) and
MAZEGEN_LOG_JSON. Both are read on every call so tests can flip them with
monkeypatch. Fields whose value is None are left out.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = {"1", "true", "yes", "on"}


def threshold() -> int:
    return LEVELS.get(os.getenv("MAZEGEN_LOG_LEVEL", "info").strip().lower(), LEVELS["info"])


def json_enabled() -> bool:
    return os.getenv("MAZEGEN_LOG_JSON", "0").strip().lower() in _TRUTHY


def _kv(key: str, value) -> str:
    if isinstance(value, (bool, int, float)):
        return f"{key}={value}"
    return f"{key}={str(value).replace(' ', '_')}"


def render(level: str, fields: dict) -> str:
    stamp = int(time.time())
    kept = {k: v for k, v in fields.items() if v is not None}
    if json_enabled():
        return json.dumps({**kept, "level": level, "ts": stamp}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={stamp}"]
    return " ".join(head + [_kv(k, v) for k, v in kept.items()])


class StructuredLogger:
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **context) -> "StructuredLogger":
        """Child logger that adds ``context`` to every event it emits."""
        return StructuredLogger(self.name, {**self.context, **context})

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= threshold()

    def _emit(self, level: str, fields: dict):
        if not self.enabled(level):
            return
        record = {**self.context, **fields}
        record.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(render(level, record), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_registry: dict[str, StructuredLogger] = {}


def get_logger(name: str = "mazegen") -> StructuredLogger:
    logger = _registry.get(name)
    if logger is None:
        logger = _registry[name] = StructuredLogger(name)
    return logger


log = get_logger()
