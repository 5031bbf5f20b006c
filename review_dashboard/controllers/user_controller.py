# controllers/user_controller.py

import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required

from review_dashboard.extensions import db
from review_dashboard.extensions.middleware import audit_log
from review_dashboard.schemas.user_schema import UserSchema
from review_dashboard.services.user_service import UserService
from review_dashboard.utils.errors import ApiError, error_response, internal_error_response

logger = logging.getLogger(__name__)

user_api_bp = Blueprint('user_api', __name__, url_prefix='/api/users')

user_schema = UserSchema()


@user_api_bp.before_request
@login_required
def _require_token():
    return None


@user_api_bp.route('/<int:user_id>', methods=['GET'])
def get_user(user_id: int):
    try:
        user = UserService(db.session).get_user(user_id)
        return jsonify(user_schema.dump(user)), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get user error", exc_info=True)
        return internal_error_response('Failed to get user')


@user_api_bp.route('', methods=['POST'])
def create_user():
    try:
        user = UserService(db.session).create_user(request.get_json(silent=True))
        audit_log('create', 'user', user.id, {'email': user.email})
        return jsonify(user_schema.dump(user)), 201
    except ApiError as e:
        return error_response(e)
    except Exception:
        db.session.rollback()
        logger.error("Create user error", exc_info=True)
        return internal_error_response('Failed to create user')


@user_api_bp.route('/<int:user_id>', methods=['DELETE'])
def delete_user(user_id: int):
    try:
        deleted = UserService(db.session).delete_user(user_id)
        audit_log('delete', 'user', user_id, {'email': deleted['email']})
        return jsonify(deleted), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        db.session.rollback()
        logger.error("Delete user error", exc_info=True)
        return internal_error_response('Failed to delete user')
