import logging
import time
from typing import Any, Dict, Optional

from flask import g, request

logger = logging.getLogger(__name__)


class RequestMiddleware:
    """
    Middleware de auditoria: mede e registra cada requisição.
    """

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Inicializa o middleware com a aplicação Flask."""
        app.before_request(self.before_request)
        app.after_request(self.after_request)
        logger.debug("Request middleware initialized.")

    def before_request(self):
        g.request_started_at = time.perf_counter()

    def after_request(self, response):
        started = getattr(g, 'request_started_at', None)
        duration_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        logger.debug(
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms} ms)",
            extra={'endpoint': request.endpoint, 'status_code': response.status_code, 'duration_ms': duration_ms},
        )
        return response


def audit_log(action: str, resource_type: str = None, resource_id: Any = None,
              details: Optional[Dict[str, Any]] = None) -> None:
    """
    Registra ações do usuário para auditoria.

    Args:
        action: Ação realizada (create, delete)
        resource_type: Tipo do recurso (review, product, user)
        resource_id: ID do recurso
        details: Detalhes adicionais da ação
    """
    from flask_login import current_user

    user_id = getattr(current_user, 'id', None) if current_user and current_user.is_authenticated else None
    log_data = {
        'user_id': user_id,
        'action': action,
        'resource_type': resource_type,
        'resource_id': resource_id,
        'ip_address': request.remote_addr,
        'endpoint': request.endpoint,
        'details': details or {},
    }
    logger.info(f"AUDIT: {log_data}", extra={'user_id': user_id, 'endpoint': request.endpoint})


request_middleware = RequestMiddleware()
