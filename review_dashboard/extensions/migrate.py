import logging
from pathlib import Path

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

logger = logging.getLogger(__name__)

migrate: Migrate = Migrate()

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / 'migrations'


def init_migrate(app: Flask, db: SQLAlchemy) -> None:
    """
    Flask-Migrate apontando para review_dashboard/migrations.

    ``render_as_batch`` permite ALTER TABLE no SQLite (dev e testes).
    """
    is_sqlite = app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite')
    try:
        migrate.init_app(app, db, directory=str(MIGRATIONS_DIR), compare_type=True, render_as_batch=is_sqlite)
    except Exception as e:
        logger.error("Flask-Migrate initialization failed", exc_info=True)
        raise RuntimeError(f"Migrate initialization failed: {e}") from e
    logger.debug(f"Flask-Migrate initialized (directory='{MIGRATIONS_DIR}', batch={is_sqlite})")
