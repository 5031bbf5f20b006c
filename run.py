#!/usr/bin/env python3
"""
Inicialização local: cria as tabelas, semeia o catálogo (opcional) e sobe o servidor de desenvolvimento.

Uso:
    python run.py [--seed] [--host 127.0.0.1] [--port 5000]
"""

import argparse
import logging
import os

from review_dashboard import create_app
from review_dashboard.extensions import db

logger = logging.getLogger(__name__)


def _parse_args():
    parser = argparse.ArgumentParser(description='Store Review Dashboard (dev server)')
    parser.add_argument('--env', default=os.getenv('FLASK_ENV', 'development'))
    parser.add_argument('--host', default=os.getenv('BIND_HOST', '127.0.0.1'))
    parser.add_argument('--port', type=int, default=int(os.getenv('PORT', '5000')))
    parser.add_argument('--seed', action='store_true', help='seed the product catalog when empty')
    return parser.parse_args()


def main():
    args = _parse_args()
    app = create_app(args.env)

    with app.app_context():
        db.create_all()
        if args.seed:
            from review_dashboard.services.catalog_service import CatalogService
            CatalogService(db.session).seed_products()

    logger.info(f"Starting dev server on http://{args.host}:{args.port}/ ({args.env})")
    app.run(host=args.host, port=args.port, debug=app.debug, threaded=True)


if __name__ == '__main__':
    main()
