"""Entrypoint to run the workout tracker Dash application."""

import logging

from workout_tracker.app import create_app
from workout_tracker.utils.config import get_config


logging.basicConfig(level=logging.INFO)
config = get_config().load_from_env()
app = create_app(config)


if __name__ == "__main__":
    app.run(debug=config.server.debug, host=config.server.host, port=config.server.port)
