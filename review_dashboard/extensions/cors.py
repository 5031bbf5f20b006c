import logging
from flask import Flask
from flask_cors import CORS

logger = logging.getLogger(__name__)

cors: CORS = CORS()


def init_cors(app: Flask) -> None:
    """Enables CORS on /api/* for the single-page dashboard."""
    origins = app.config.get('CORS_ORIGINS') or '*'
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": origins}},
        allow_headers=['Content-Type', 'Authorization'],
    )
    logger.debug(f"CORS enabled for /api/* (origins={origins})")
