"""
STELLA - Stellar Evolution Lab
Flask application factory.

Serves the JSON API for the stellar evolution engine via registered
StellaService instances. Presentation (timeline UI, star rendering)
lives in the client and consumes these endpoints.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI

Configuration:
    REFERENCE_CATALOG_PATH     # app config key, or the
    STELLA_REFERENCE_CATALOG   # environment variable: JSON file that
                               # replaces the built-in reference catalog
"""

__version__ = "0.1.0"

import logging
import os

from flask import Flask, jsonify

from physics.services import StellaRegistry
from physics.services.evolution import EvolutionService
from physics.services.comparison import ComparisonService
from data.reference_stars import load_catalog_file

log = logging.getLogger(__name__)


def create_registry(catalog_path=None):
    """Build and populate the service registry."""
    catalog = load_catalog_file(catalog_path) if catalog_path else None
    registry = StellaRegistry()
    registry.register(EvolutionService())
    registry.register(ComparisonService(catalog))
    return registry


def create_app(config=None):
    """Application factory for the STELLA Flask app."""
    app = Flask(__name__)
    app.config.from_mapping(
        REFERENCE_CATALOG_PATH=os.environ.get("STELLA_REFERENCE_CATALOG"),
    )
    if config:
        app.config.from_mapping(config)

    # Build service registry
    registry = create_registry(app.config.get("REFERENCE_CATALOG_PATH"))
    app.extensions["stella_registry"] = registry

    # Create and register API blueprint (shared + service-owned routes)
    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    @app.route("/")
    def index():
        return jsonify({
            "name": "STELLA",
            "version": __version__,
            "services": registry.list_all(),
        })

    log.debug("STELLA app created with services: %s",
              ", ".join(s["id"] for s in registry.list_all()))
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
