# controllers/auth_controller.py

import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from review_dashboard.extensions import db
from review_dashboard.schemas.user_schema import UserSchema
from review_dashboard.services.user_service import UserService
from review_dashboard.utils.errors import ApiError, AuthError, error_response, internal_error_response
from review_dashboard.utils.security import generate_token, log_security_event

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

user_schema = UserSchema()


@auth_bp.route('/register', methods=['POST'])
def register():
    """Cria a conta e devolve o token já emitido."""
    try:
        user = UserService(db.session).create_user(request.get_json(silent=True))
        token = generate_token(user.id, user.email)
        log_security_event('register_success', user_id=user.id, email=user.email)
        return jsonify({
            'message': 'User registered successfully',
            'user': user_schema.dump(user),
            'token': token,
        }), 201
    except ApiError as e:
        return error_response(e)
    except Exception:
        db.session.rollback()
        logger.error("Registration error", exc_info=True)
        return internal_error_response('Failed to register user')


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    try:
        user = UserService(db.session).authenticate(data)
        token = generate_token(user.id, user.email)
        log_security_event('login_success', user_id=user.id, email=user.email)
        return jsonify({
            'message': 'Login successful',
            'user': user_schema.dump(user),
            'token': token,
        }), 200
    except AuthError as e:
        email = data.get('email') if isinstance(data, dict) else None
        log_security_event('login_failed', email=email, details={'reason': e.message})
        return error_response(e)
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Login error", exc_info=True)
        return internal_error_response('Failed to login')


@auth_bp.route('/profile', methods=['GET'])
@login_required
def profile():
    """Perfil do dono do token; 404 quando a conta foi removida depois da emissão."""
    try:
        user = UserService(db.session).get_user(current_user.id)
        return jsonify({'user': user_schema.dump(user)}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Profile error", exc_info=True)
        return internal_error_response('Failed to get profile')
