"""
Factory da aplicação Store Review Dashboard.
Seleciona a configuração, inicializa extensões, registra blueprints,
handlers de erro JSON e comandos CLI.
"""

import logging
import os
from typing import Optional, Type

import click
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from review_dashboard.extensions import db, init_extensions
from review_dashboard.settings import BaseConfig, config_map
from review_dashboard.settings.development import DevelopmentConfig
from review_dashboard.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _select_config(env_name: Optional[str], config_class) -> Type[BaseConfig]:
    if config_class is None:
        env = (env_name or os.getenv('FLASK_ENV', 'development') or 'development').strip().lower()
        return config_map.get(env, DevelopmentConfig)
    if isinstance(config_class, str):
        return config_map.get(config_class.strip().lower(), DevelopmentConfig)
    return config_class


def _wants_json() -> bool:
    return request.path.startswith('/api')


def register_error_handlers(app: Flask) -> None:
    """Erros de roteamento (404/405) e 500 não tratados viram JSON nas rotas /api."""

    @app.errorhandler(404)
    def _not_found(e):
        if _wants_json():
            return jsonify({'error': 'Route not found'}), 404
        return e

    @app.errorhandler(405)
    def _method_not_allowed(e):
        if _wants_json():
            return jsonify({'error': 'Method not allowed'}), 405
        return e

    @app.errorhandler(500)
    def _internal_error(e):
        logger.error(f"Unhandled error on {request.method} {request.path}", exc_info=True)
        db.session.rollback()
        if _wants_json():
            return jsonify({'error': 'Internal server error'}), 500
        if isinstance(e, HTTPException):
            return e
        return 'Internal server error', 500


def register_cli(app: Flask) -> None:

    @app.cli.command('init-db')
    def init_db_command():
        """Cria as tabelas (products, reviews, users)."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-products')
    def seed_products_command():
        """Insere o catálogo inicial quando a tabela de produtos está vazia."""
        from review_dashboard.services.catalog_service import CatalogService

        db.create_all()
        inserted = CatalogService(db.session).seed_products()
        if inserted:
            click.echo(f'Seeded {inserted} products.')
        else:
            click.echo('Products already exist, skipping seeding.')


def create_app(env_name: Optional[str] = None, config_class=None) -> Flask:
    """
    Factory para criar a aplicação Flask.

    Args:
        env_name: 'development' | 'testing' | 'production' (default: FLASK_ENV).
        config_class: classe de configuração ou nome, tem precedência sobre env_name.
    """
    selected_config = _select_config(env_name, config_class)

    if not logging.getLogger().handlers:
        setup_logging(selected_config.LOG_LEVEL, selected_config.LOG_FORMAT == 'json')

    app = Flask(__name__)
    app.config.from_object(selected_config)
    selected_config.init_app(app)
    selected_config.validate()

    init_extensions(app)

    # modelos precisam estar importados antes de create_all/migrate
    from review_dashboard import models  # noqa: F401
    from review_dashboard.controllers import BLUEPRINTS
    from review_dashboard.extensions.csrf import exempt_api_blueprints

    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
    exempt_api_blueprints(app)

    register_error_handlers(app)
    register_cli(app)

    logger.info(f"Application created with {selected_config.__name__}")
    return app
