# settings/__init__.py

from .base import BaseConfig, ConfigError
from .development import DevelopmentConfig
from .testing import TestingConfig
from .production import ProductionConfig

config_map = {
    'development': DevelopmentConfig,
    'testing':     TestingConfig,
    'production':  ProductionConfig,
    'default':     DevelopmentConfig,
}

__all__ = ['config_map', 'BaseConfig', 'ConfigError']
