# utils/security.py

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from flask import current_app, request
from flask_login import UserMixin

from review_dashboard.utils.errors import AuthError

logger = logging.getLogger(__name__)


# ---------- Senhas (bcrypt) ----------

def hash_password(password: str) -> str:
    """Gera o hash bcrypt (com salt aleatório) de uma senha em texto puro."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Verifica se a senha fornecida corresponde ao hash armazenado."""
    if not isinstance(password, str) or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        logger.error("Invalid password hash format detected.", exc_info=True)
        return False


# ---------- Bearer tokens (JWT) ----------

class TokenIdentity(UserMixin):
    """Identidade extraída de um token válido (userId + email, sem acesso ao banco)."""

    def __init__(self, user_id: int, email: str):
        self.id = user_id
        self.email = email

    def __repr__(self) -> str:
        return f"<TokenIdentity id={self.id} email='{self.email}'>"


def generate_token(user_id: int, email: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        'userId': user_id,
        'email': email,
        'iat': now,
        'exp': now + current_app.config['JWT_EXPIRES_IN'],
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256'),
    )


def verify_token(token: str) -> TokenIdentity:
    """Valida assinatura e expiração; levanta AuthError caso contrário."""
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')],
            options={'require': ['exp', 'userId']},
        )
    except jwt.ExpiredSignatureError:
        raise AuthError('Token expired')
    except jwt.InvalidTokenError:
        raise AuthError('Invalid token')
    try:
        return TokenIdentity(int(payload['userId']), payload.get('email'))
    except (TypeError, ValueError):
        raise AuthError('Invalid token')


# ---------- Auditoria ----------

def get_client_ip() -> str:
    """Obtém o IP real do cliente, considerando proxies."""
    if request.headers.get('X-Forwarded-For'):
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    elif request.headers.get('X-Real-IP'):
        return request.headers.get('X-Real-IP')
    return request.remote_addr or 'unknown'


def log_security_event(event_type: str, user_id: Optional[int] = None,
                       email: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
    """Registra eventos de segurança para auditoria."""
    event = {
        'event_type': event_type,
        'user_id': user_id,
        'email': email,
        'ip_address': get_client_ip(),
        'user_agent': request.headers.get('User-Agent', ''),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'details': details or {},
    }
    level = logging.WARNING if event_type.endswith(('_failed', '_rejected')) else logging.INFO
    logger.log(level, f"SECURITY_EVENT: {event}", extra={'user_id': user_id})
