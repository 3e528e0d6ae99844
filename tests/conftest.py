import logging
import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeongen import create_app  # noqa: E402
from dungeongen.routes.dungeon_api import _dungeon_cache, _dungeon_cache_lock  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "DUNGEON_MAX_DIMENSION": 16, "DUNGEON_CACHE_MAX": 4})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Cached layouts may carry metrics from another app config; start every test empty."""
    with _dungeon_cache_lock:
        _dungeon_cache.clear()
    yield
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


@pytest.fixture()
def preserve_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
