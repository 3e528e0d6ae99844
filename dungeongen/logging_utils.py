"""Structured event logging for dungeongen.

The generator, the HTTP routes and the CLI report what they did as single
events rather than free text, one line per event:

    level=info ts=1700000000 event=dungeon_generated seed=42 size=8x8x8 rooms=265 doors=264 runtime_ms=31 logger=dungeongen.generator

Events currently emitted:
    dungeon_generated  (info)   one per DungeonGraph.generate run
    growth_exhausted   (debug)  when the room stack runs dry
    api_generate       (info)   POST /api/dungeon/generate
    listen             (info)   server bootup from run.py

Environment:
    DUNGEONGEN_LOG_LEVEL  debug|info|warn|error (default: info)
    DUNGEONGEN_LOG_JSON   1/true/yes/on to emit one JSON object per line

String values have spaces replaced so lines split on whitespace; None values
are dropped. Reserved keys: level, ts. Flask's own request logs go through the
stdlib ``logging`` tree that :mod:`dungeongen.server` configures.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("DUNGEONGEN_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("DUNGEONGEN_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "dungeongen"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeongen")
