import logging
from typing import List

from flask import Flask
from flask_wtf.csrf import CSRFProtect

logger = logging.getLogger(__name__)

csrf: CSRFProtect = CSRFProtect()

# rotas com bearer token não usam cookie de sessão, logo não precisam de token CSRF
API_PREFIX = '/api'


def init_csrf(app: Flask) -> None:
    """CSRF do Flask-WTF para os formulários do dashboard (login, nova review)."""
    app.config.setdefault('WTF_CSRF_TIME_LIMIT', 3600)
    try:
        csrf.init_app(app)
    except Exception as e:
        logger.error("CSRF setup failed", exc_info=True)
        raise RuntimeError(f"CSRF initialization failed: {e}") from e
    logger.debug(f"CSRF protection on (enabled={app.config.get('WTF_CSRF_ENABLED', True)})")


def exempt_api_blueprints(app: Flask) -> List[str]:
    """
    Isenta de CSRF os blueprints montados sob ``/api``.

    Deve rodar depois do registro dos blueprints. Retorna os nomes isentos.
    """
    exempted = []
    for name, blueprint in app.blueprints.items():
        if (blueprint.url_prefix or '').startswith(API_PREFIX):
            csrf.exempt(blueprint)
            exempted.append(name)
    logger.debug(f"CSRF exempt blueprints: {exempted}")
    return exempted
