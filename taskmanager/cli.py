"""
Flask CLI commands.

Schema creation is an explicit step, run once before serving::

    flask --app wsgi init-db
    flask --app wsgi init-db --drop   # start from an empty table
"""

from __future__ import annotations

import logging

import click
from flask import Flask
from flask.cli import with_appcontext

from . import db

logger = logging.getLogger(__name__)


def init_db(drop: bool = False) -> None:
    """Create every table known to the models, optionally dropping them first.

    Must be called inside an application context.
    """
    # Make sure the Task table is registered on the metadata.
    from . import models  # noqa: F401

    if drop:
        db.drop_all()
        logger.info("Dropped database tables")
    db.create_all()
    logger.info("Database tables created")


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Drop existing tables before creating them.")
@with_appcontext
def init_db_command(drop: bool) -> None:
    """Create the tasks table."""
    init_db(drop=drop)
    click.echo("Initialized the database.")


def register_commands(app: Flask) -> None:
    """Register CLI commands on ``app``."""
    app.cli.add_command(init_db_command)
