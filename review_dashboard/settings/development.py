# settings/development.py

import os

from .base import BaseConfig


class DevelopmentConfig(BaseConfig):
    """
    Desenvolvimento local: DEBUG ligado, log detalhado, SQLite em instance/.

    SQL_ECHO=true liga o echo do SQLAlchemy.
    """

    DEBUG: bool = True
    SQLALCHEMY_ECHO: bool = os.getenv('SQL_ECHO', 'false').lower() == 'true'

    # front-end de desenvolvimento (Vite/CRA) rodando em outra porta
    CORS_ORIGINS = [o.strip() for o in os.getenv(
        'CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173'
    ).split(',') if o.strip()]

    LOG_LEVEL: str = 'DEBUG'
