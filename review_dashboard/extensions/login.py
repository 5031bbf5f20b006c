import logging
from flask import Flask, jsonify, request
from flask_login import LoginManager

logger = logging.getLogger(__name__)

login_manager: LoginManager = LoginManager()


def _bearer_token() -> str:
    header = request.headers.get('Authorization', '') or ''
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()


def init_login(app: Flask) -> None:
    """
    Initializes the Flask-Login extension for stateless bearer tokens.

    The request loader validates the token signature and expiry only and
    yields a TokenIdentity; no database lookup happens here.
    """
    try:
        login_manager.init_app(app)

        @login_manager.request_loader
        def load_identity_from_request(req):
            from review_dashboard.utils.security import verify_token, log_security_event
            from review_dashboard.utils.errors import AuthError

            token = _bearer_token()
            if not token:
                return None
            try:
                return verify_token(token)
            except AuthError as e:
                log_security_event('token_rejected', details={'reason': e.message, 'path': req.path})
                return None

        @login_manager.unauthorized_handler
        def _unauthorized():
            if _bearer_token():
                return jsonify({'error': 'Invalid or expired token'}), 401
            return jsonify({'error': 'Access token required'}), 401

        logger.debug("Flask-Login initialized successfully.")
    except Exception as e:
        logger.error("Flask-Login initialization failed.", exc_info=True)
        raise RuntimeError(f"LoginManager initialization failed: {e}") from e
