# controllers/product_controller.py

import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required

from review_dashboard.extensions import db
from review_dashboard.extensions.middleware import audit_log
from review_dashboard.models.product import CATEGORIES
from review_dashboard.schemas.product_schema import ProductSchema
from review_dashboard.services.catalog_service import CatalogService
from review_dashboard.utils.errors import ApiError, error_response, internal_error_response
from review_dashboard.utils.price_ranges import PRICE_RANGES

logger = logging.getLogger(__name__)

product_api_bp = Blueprint('product_api', __name__, url_prefix='/api/products')

product_schema = ProductSchema()
products_schema = ProductSchema(many=True)


@product_api_bp.route('', methods=['GET'])
def list_products():
    """Lista todo o catálogo com as listas de categorias e faixas de preço."""
    try:
        products = CatalogService(db.session).list_products()
        return jsonify({
            'products': products_schema.dump(products),
            'categories': list(CATEGORIES),
            'priceRanges': list(PRICE_RANGES),
        }), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get products error", exc_info=True)
        return internal_error_response('Failed to get products')


@product_api_bp.route('/category/<category>', methods=['GET'])
def list_products_by_category(category: str):
    try:
        products = CatalogService(db.session).list_products(category=category)
        return jsonify({'products': products_schema.dump(products)}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get products by category error", exc_info=True)
        return internal_error_response('Failed to get products')


@product_api_bp.route('/price/<path:price_range>', methods=['GET'])
def list_products_by_price_range(price_range: str):
    """Filtra pelo rótulo da faixa (ex.: "£20-£50"); rótulo desconhecido -> 400."""
    try:
        products = CatalogService(db.session).list_products(price_range=price_range)
        return jsonify({'products': products_schema.dump(products)}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get products by price range error", exc_info=True)
        return internal_error_response('Failed to get products')


@product_api_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id: int):
    try:
        product = CatalogService(db.session).get_product(product_id)
        return jsonify({'product': product_schema.dump(product)}), 200
    except ApiError as e:
        return error_response(e)
    except Exception:
        logger.error("Get product error", exc_info=True)
        return internal_error_response('Failed to get product')


@product_api_bp.route('', methods=['POST'])
@login_required
def create_product():
    try:
        product = CatalogService(db.session).create_product(request.get_json(silent=True))
        audit_log('create', 'product', product.id, {'name': product.name, 'category': product.category})
        return jsonify({
            'message': 'Product created successfully',
            'product': product_schema.dump(product),
        }), 201
    except ApiError as e:
        return error_response(e)
    except Exception:
        db.session.rollback()
        logger.error("Create product error", exc_info=True)
        return internal_error_response('Failed to create product')
