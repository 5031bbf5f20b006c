# utils/errors.py

import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import jsonify
from flask.wrappers import Response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base das falhas mapeadas para respostas HTTP."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Validation failed'


class NotFoundError(ApiError):
    status_code = 404
    default_message = 'Resource not found'


class ConflictError(ApiError):
    status_code = 409
    default_message = 'Resource already exists'


class AuthError(ApiError):
    status_code = 401
    default_message = 'Authentication required'


class InternalError(ApiError):
    status_code = 500
    default_message = 'Internal server error'


class AnalyticsError(InternalError):
    default_message = 'Failed to get analytics'


def error_response(error: ApiError) -> Tuple[Response, int]:
    return jsonify(error.to_dict()), error.status_code


def internal_error_response(message: str = InternalError.default_message) -> Tuple[Response, int]:
    """Resposta 500 genérica; nenhum detalhe interno é exposto."""
    return jsonify({'error': message}), 500


def details_from_messages(messages: Any, prefix: str = '') -> List[Dict[str, Any]]:
    """Achata o dict de erros do marshmallow em [{field, message}]."""
    details: List[Dict[str, Any]] = []
    if isinstance(messages, dict):
        for field, value in messages.items():
            name = f"{prefix}.{field}" if prefix else str(field)
            if isinstance(value, (dict, list)):
                if isinstance(value, list) and all(isinstance(v, str) for v in value):
                    details.extend({'field': name, 'message': v} for v in value)
                else:
                    details.extend(details_from_messages(value, name))
            else:
                details.append({'field': name, 'message': str(value)})
    elif isinstance(messages, list):
        details.extend({'field': prefix or '_schema', 'message': str(m)} for m in messages)
    else:
        details.append({'field': prefix or '_schema', 'message': str(messages)})
    return details
