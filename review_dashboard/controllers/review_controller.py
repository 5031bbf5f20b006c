# controllers/review_controller.py

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required

from review_dashboard.extensions import db
from review_dashboard.extensions.middleware import audit_log
from review_dashboard.schemas.review_schema import ReviewSchema
from review_dashboard.services.analytics_service import compute_analytics
from review_dashboard.services.review_service import ReviewService
from review_dashboard.utils.errors import ApiError, AnalyticsError, error_response, internal_error_response

logger = logging.getLogger(__name__)

review_api_bp = Blueprint('review_api', __name__, url_prefix='/api/reviews')

review_schema = ReviewSchema()
reviews_schema = ReviewSchema(many=True)


@review_api_bp.before_request
@login_required
def _require_token():
    """Todas as rotas de reviews exigem bearer token."""
    return None


@review_api_bp.route('', methods=['POST'])
def create_review():
    try:
        review = ReviewService(db.session).create_review(request.get_json(silent=True))
        audit_log('create', 'review', review.id, {'product_id': review.product_id, 'rating': review.rating})
        return jsonify({
            'message': 'Review created successfully',
            'review': review_schema.dump(review),
        }), 201
    except ApiError as e:
        return error_response(e)
    except Exception:
        db.session.rollback()
        logger.error("Create review error", exc_info=True)
        return internal_error_response('Failed to create review')


@review_api_bp.route('', methods=['GET'])
def list_reviews():
    """
    Listagem paginada.

    Query: page, limit, category, rating ("1-2" | "3" | "4-5"),
    sortBy, sortOrder (ASC | DESC).
    """
    try:
        reviews, pagination = ReviewService(db.session).list_reviews(request.args.to_dict())
        return jsonify({'reviews': reviews_schema.dump(reviews), 'pagination': pagination}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get reviews error", exc_info=True)
        return internal_error_response('Failed to get reviews')


@review_api_bp.route('/analytics', methods=['GET'])
def get_analytics():
    try:
        snapshot = compute_analytics(db.session, current_app.config)
        return jsonify(snapshot.to_dict()), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get analytics error", exc_info=True)
        return error_response(AnalyticsError())


@review_api_bp.route('/<int:review_id>', methods=['GET'])
def get_review(review_id: int):
    try:
        review = ReviewService(db.session).get_review(review_id)
        return jsonify({'review': review_schema.dump(review)}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get review error", exc_info=True)
        return internal_error_response('Failed to get review')
