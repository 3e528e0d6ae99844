"""
Dungeon generation API routes.

Serves generated layouts as plain JSON (rooms + classified edges) for
renderers and other clients. Layouts are deterministic per (seed, size) so
instances are cached in-process.
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from dungeongen.dungeon import DungeonGraph, EdgeState, InvalidDimension
from dungeongen.logging_utils import get_logger
from dungeongen.routes.validation import ValidationError, dungeon_schema, validate

log = get_logger("dungeongen.api")

bp_dungeon = Blueprint("dungeon", __name__)

SEED_MAX_INT = 9223372036854775807

# Simple in-process cache (seed,size)->DungeonGraph. Lock-protected because the dev server may run threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded 63-bit int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX_INT
    s = str(payload_seed).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isascii() and s.isdigit():
        return int(s) % SEED_MAX_INT
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX_INT


def get_cached_dungeon(seed: int, size_tuple: tuple[int, int, int]) -> DungeonGraph:
    enable_metrics = bool(current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True))
    if os.environ.get("DUNGEON_DISABLE_CACHE") == "1":
        dungeon = DungeonGraph(*size_tuple, enable_metrics=enable_metrics)
        dungeon.generate(seed)
        return dungeon
    key = (seed, size_tuple)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = DungeonGraph(*size_tuple, enable_metrics=enable_metrics)
    dungeon.generate(seed)
    cache_max = int(current_app.config.get("DUNGEON_CACHE_MAX", 8))
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        while len(_dungeon_cache) > cache_max:
            first_key = next(iter(_dungeon_cache.keys()))
            _dungeon_cache.pop(first_key, None)
    return dungeon


def _query_payload():
    """Query-string args as a payload dict; numeric strings become ints."""
    payload = {}
    for name in ("width", "length", "floors"):
        raw = request.args.get(name)
        if raw is None:
            continue
        raw = raw.strip()
        try:
            payload[name] = int(raw) if raw.isascii() else raw
        except ValueError:
            # left as a string so validation reports a type error
            payload[name] = raw
    for name in ("seed", "state"):
        if name in request.args:
            payload[name] = request.args[name]
    return payload


def _resolve_request(payload):
    """Validate payload and return (seed, size, edge_state); raises ValidationError."""
    cfg = current_app.config
    ok, data = validate(payload, dungeon_schema(int(cfg.get("DUNGEON_MAX_DIMENSION", 32))))
    if not ok:
        raise ValidationError(data["field"], data["error"], data["code"])
    size = (
        data.get("width", cfg.get("DUNGEON_DEFAULT_WIDTH", 8)),
        data.get("length", cfg.get("DUNGEON_DEFAULT_LENGTH", 8)),
        data.get("floors", cfg.get("DUNGEON_DEFAULT_FLOORS", 8)),
    )
    state = EdgeState(data["state"]) if data.get("state") else None
    return _coerce_seed(data.get("seed")), size, state


@bp_dungeon.errorhandler(ValidationError)
def _validation_error(e: ValidationError):
    return jsonify(e.to_dict()), 400


@bp_dungeon.errorhandler(InvalidDimension)
def _invalid_dimension(e: InvalidDimension):
    return jsonify({"field": e.field, "error": str(e), "code": "dimension"}), 400


@bp_dungeon.route("/api/dungeon", methods=["GET"])
def dungeon_layout():
    """Return a generated layout.

    Query: seed (int or string), width, length, floors, state (unused|wall|door edge filter)
    Response: { seed, size: [w, l, f], rooms: [...], edges: [...], metrics: {...} }
    """
    seed, size, state = _resolve_request(_query_payload())
    dungeon = get_cached_dungeon(seed, size)
    return jsonify(dungeon.to_dict(edge_state=state))


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate_dungeon():
    """Generate from a JSON body: { "seed": <int|str|null>, "width", "length", "floors", "state" }."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    seed, size, state = _resolve_request(payload)
    dungeon = get_cached_dungeon(seed, size)
    log.info(event="api_generate", seed=seed, size="x".join(str(d) for d in size))
    return jsonify(dungeon.to_dict(edge_state=state))


@bp_dungeon.route("/api/dungeon/metrics", methods=["GET"])
def dungeon_metrics():
    """Return only the generation metrics: { seed, size, metrics }.

    Metrics are empty when DUNGEON_ENABLE_GENERATION_METRICS is off.
    """
    seed, size, _state = _resolve_request(_query_payload())
    dungeon = get_cached_dungeon(seed, size)
    return jsonify({"seed": dungeon.seed, "size": list(dungeon.size), "metrics": dungeon.metrics})
