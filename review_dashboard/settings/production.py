# settings/production.py

import os
from .base import BaseConfig, ConfigError


class ProductionConfig(BaseConfig):
    """
    Produção: cookies seguros, logs em JSON e pool de conexões ajustável.

    SECRET_KEY é obrigatório no ambiente; JWT_SECRET_KEY, quando ausente,
    reaproveita o SECRET_KEY.
    """
    DEBUG = False
    PREFERRED_URL_SCHEME = 'https'
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    LOG_FORMAT = os.getenv('LOG_FORMAT', 'json').lower()

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': int(os.getenv('DB_POOL_SIZE', '10')),
        'max_overflow': int(os.getenv('DB_MAX_OVERFLOW', '20')),
        'pool_recycle': int(os.getenv('DB_POOL_RECYCLE', '3600')),
        'pool_pre_ping': True,
    }

    @classmethod
    def validate(cls) -> None:
        super().validate()
        if not os.getenv('SECRET_KEY'):
            raise ConfigError("SECRET_KEY must be set in production environment variables")
        if cls.JWT_SECRET_KEY == 'dev-secret-key':
            raise ConfigError("JWT_SECRET_KEY must not use the development default")
