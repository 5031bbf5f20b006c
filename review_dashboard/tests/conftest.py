# tests/conftest.py

import os
import sys
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

# Adicionar o diretório raiz ao path (raiz do projeto)
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from review_dashboard import create_app  # noqa: E402
from review_dashboard.extensions import db  # noqa: E402
from review_dashboard.models import Product, Review, User  # noqa: E402
from review_dashboard.utils.security import generate_token  # noqa: E402

DEFAULT_PASSWORD = 'password123'


@pytest.fixture
def app():
    """Aplicação de teste com SQLite em memória; tabelas recriadas a cada teste."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Contexto de aplicação para testes de serviço (usa db.session diretamente)."""
    with app.app_context():
        yield
        db.session.rollback()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email='staff@store.com', first_name='Store', last_name='Staff',
              password=DEFAULT_PASSWORD, is_active=True):
        with app.app_context():
            user = User(email=email, first_name=first_name, last_name=last_name, is_active=is_active)
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return SimpleNamespace(id=user.id, email=user.email, password=password)
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def token(app, user):
    with app.test_request_context():
        return generate_token(user.id, user.email)


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def make_product(app):
    counter = {'n': 0}

    def _make(name=None, category='Electronics', price='49.99'):
        counter['n'] += 1
        with app.app_context():
            product = Product(
                name=name or f'Test Product {counter["n"]}',
                category=category,
                price=Decimal(str(price)),
            )
            db.session.add(product)
            db.session.commit()
            return SimpleNamespace(id=product.id, name=product.name, category=product.category,
                                   price=product.price)
    return _make


@pytest.fixture
def make_review(app):
    """Cria reviews direto no banco; ``created_at`` explícito permite fixar a ordem."""
    def _make(product, rating, comment=None, created_at=None, category=None):
        with app.app_context():
            review = Review(
                product_id=product.id,
                category=category or product.category,
                rating=rating,
                comment=comment,
            )
            if created_at is not None:
                review.created_at = created_at
                review.updated_at = created_at
            db.session.add(review)
            db.session.commit()
            return SimpleNamespace(id=review.id, product_id=review.product_id, rating=review.rating,
                                   category=review.category, comment=review.comment)
    return _make


@pytest.fixture
def base_time():
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
