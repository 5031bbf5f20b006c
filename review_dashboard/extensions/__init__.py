"""
Extensões Flask: instâncias globais e inicialização centralizada.

Ordem importa: o banco vem antes do Migrate; o CSRF antes do registro dos
blueprints (a isenção das rotas /api acontece depois, em main_startup).
"""

import logging

from flask import Flask

from .db import db, init_db
from .migrate import migrate, init_migrate
from .login import login_manager, init_login
from .csrf import csrf, init_csrf
from .cors import cors, init_cors
from .middleware import request_middleware

logger = logging.getLogger(__name__)

__all__ = ['db', 'migrate', 'login_manager', 'csrf', 'cors', 'request_middleware', 'init_extensions']


def init_extensions(app: Flask) -> None:
    init_db(app)
    init_migrate(app, db)
    init_login(app)
    init_csrf(app)
    init_cors(app)
    request_middleware.init_app(app)
    logger.debug(f"Extensions ready for {app.name}")
