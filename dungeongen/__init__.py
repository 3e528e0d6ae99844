"""
project: dungeongen
module: __init__.py

Flask application factory for the dungeon generation service.

Configuration is sourced from environment variables (optionally via a local
`.env` file) with defaults suited to development. The generation core lives
in :mod:`dungeongen.dungeon` and has no dependency on the web layer.
"""

import os

from dotenv import load_dotenv
from flask import Flask

__version__ = "0.1.0"


def create_app(test_config=None):
    """Return a configured Flask app with the dungeon blueprint registered."""
    # Load .env if present so DUNGEON_* settings can be supplied without exporting shell variables.
    load_dotenv()
    from dungeongen.dungeon import GenerationConfig

    defaults = GenerationConfig.from_env()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        DUNGEON_MAX_DIMENSION=int(os.getenv("DUNGEON_MAX_DIMENSION", "32")),
        DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
        DUNGEON_DEFAULT_WIDTH=defaults.width,
        DUNGEON_DEFAULT_LENGTH=defaults.length,
        DUNGEON_DEFAULT_FLOORS=defaults.floors,
        DUNGEON_ENABLE_GENERATION_METRICS=defaults.enable_metrics,
    )
    if test_config:
        app.config.update(test_config)

    from dungeongen.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)
    return app
