"""Structured line logging for islandgen.

islandgen is a library, so it stays quiet by default (level ``warn``) and never
touches the host application's stdlib logging setup. Each record is a single
line on stdout (``error`` goes to stderr), either ``key=value`` pairs or one
JSON object, so generation runs can be grepped or fed to a log parser.

    from .logging_utils import get_logger
    log = get_logger("solver")
    log.debug(event="collapse", cycle=3, x=1, y=0, tile="Ocean")

Environment (read once at import, adjustable with ``set_level`` and
``set_json_mode``):
    ISLANDGEN_LOG_LEVEL  debug|info|warn|error
    ISLANDGEN_LOG_JSON   1/true/yes/on

Fields set to None are dropped. ``level``, ``ts`` and ``logger`` are filled in
for every record.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("ISLANDGEN_LOG_LEVEL", "warn").lower(), LEVELS["warn"])
JSON_MODE = os.getenv("ISLANDGEN_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS[level.lower()]


def set_json_mode(enabled: bool) -> None:
    global JSON_MODE
    JSON_MODE = bool(enabled)


def _kv_value(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return str(value).replace(" ", "_")


def _format(level: str, **fields) -> str:
    record = {"level": level, "ts": int(time.time())}
    record.update((k, v) for k, v in fields.items() if v is not None)
    if JSON_MODE:
        return json.dumps(record, separators=(",", ":"), default=str)
    return " ".join(f"{k}={_kv_value(v)}" for k, v in record.items())


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, **fields), file=stream)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str = "islandgen"):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]
