# base_model.py

from datetime import datetime, timezone

from review_dashboard.extensions.db import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """
    Modelo base abstrato para SQLAlchemy (Flask-SQLAlchemy).
    Fornece chave primária e colunas de auditoria.
    """
    __abstract__ = True

    id = db.Column(
        db.Integer,
        primary_key=True,
        autoincrement=True,
        doc='Chave primária'
    )
    # Timestamps gerados no Python (resolução de microssegundos) para que a
    # ordenação por criação seja estável mesmo no SQLite.
    created_at = db.Column(
        db.DateTime,
        default=utcnow,
        nullable=False,
        doc='Data de criação'
    )
    updated_at = db.Column(
        db.DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc='Data da última atualização'
    )
