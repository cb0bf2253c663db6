# blogapp/__init__.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import click
from flask import Flask, render_template
from werkzeug.exceptions import HTTPException

from . import i18n
from .config import load_config
from .db import init_db
from .routes import register_routes

log = logging.getLogger(__name__)

# status code -> message key shown on the error page
ERROR_MESSAGES = {
    403: "MsgForbidden",
    404: "MsgNotFound",
    413: "MsgTooLarge",
}


def _register_error_handlers(app: Flask) -> None:
    def handle_http_error(err: HTTPException):
        # A custom description (e.g. the translated "not an admin" reason) wins
        if err.description != type(err).description:
            message = err.description
        else:
            message = i18n.translate(ERROR_MESSAGES[err.code])
        return render_template("error.html", code=err.code, message=message), err.code

    for code in (403, 404, 413):
        app.register_error_handler(code, handle_http_error)


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Application factory.

    Bootstrap order: config -> database (pool + migration) -> message tables
    -> routes.
    """
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db(app.config["DATABASE_URL"])
    i18n.init_app(app)
    register_routes(app)
    _register_error_handlers(app)

    @app.cli.command("init-db")
    def init_db_command():
        """Create the blog tables if they don't exist."""
        init_db(app.config["DATABASE_URL"])
        click.echo("Database initialised.")

    log.info("Blog app ready (base url %s)", app.config["BASE_URL"])
    return app
