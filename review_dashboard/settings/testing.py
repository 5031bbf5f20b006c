# settings/testing.py

from datetime import timedelta

from .base import BaseConfig


class TestingConfig(BaseConfig):
    """
    Configurações específicas para o ambiente de Teste.
    Ativa TESTING, desativa CSRF e usa SQLite em memória.
    """
    DEBUG = False
    TESTING = True
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'ERROR'

    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    JWT_EXPIRES_IN = timedelta(days=7)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    API_BASE_URL = 'http://api.test'
