"""Run the service with the built-in Werkzeug server: ``python -m taskmanager``."""

from __future__ import annotations

import os

from . import create_app, logger


def main() -> None:
    app = create_app(os.getenv("FLASK_ENV", "development"))
    host = app.config["HOST"]
    port = app.config["PORT"]
    logger.info("Starting server on %s:%s", host, port)
    app.run(host=host, port=port)


if __name__ == "__main__":
    main()
