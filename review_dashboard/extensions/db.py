import logging
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

logger = logging.getLogger(__name__)

db: SQLAlchemy = SQLAlchemy()


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # reviews.product_id depende do ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def init_db(app: Flask) -> None:
    """Initializes SQLAlchemy."""
    try:
        db.init_app(app)
        logger.debug("SQLAlchemy initialized")

        with app.app_context():
            engine = db.engine
            if engine.dialect.name == 'sqlite':
                logger.debug("Configuring SQLite PRAGMAs (foreign_keys=ON)...")
                event.listen(engine, "connect", _set_sqlite_pragmas)
    except Exception as e:
        logger.error("SQLAlchemy initialization failed", exc_info=True)
        raise RuntimeError(f"Database initialization failed: {e}") from e
