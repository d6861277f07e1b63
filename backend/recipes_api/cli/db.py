"""Flask CLI commands managing the database schema."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from recipes_api.core.extensions import db

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError("'--drop' is restricted to non-production environments.")


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Drop every table before creating them.")
@with_appcontext
def init_db_command(drop: bool) -> None:
    """Create the ``users``, ``recipes`` and ``recipe_tags`` tables."""
    if drop:
        _ensure_non_production()
        db.drop_all()
        LOGGER.warning("db.dropped")
    db.create_all()
    LOGGER.info("db.created")
    click.echo("Database initialized.")
