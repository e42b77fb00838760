"""
Purpose: Flask server exposing the map Pathfinder over HTTP.
Dependencies: flask, server/routes/map.py, hexnav.
Ext Hooks: Several maps keyed by id instead of one Pathfinder per app.
Client/Server: Server for navigation; units ask it for routes.
"""

from flask import Flask

from hexnav.logging_config import configure_logging
from hexnav.pathfinding.pathfinder import Pathfinder
from server.routes.map import bp


def create_app(pathfinder=None):
    """Build the app around pathfinder, or a default-sized one."""
    app = Flask(__name__)
    app.extensions['pathfinder'] = pathfinder if pathfinder is not None else Pathfinder()
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    configure_logging()
    create_app().run(debug=True)
