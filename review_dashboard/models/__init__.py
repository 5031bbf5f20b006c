# models/__init__.py

from review_dashboard.models.product import Product, CATEGORIES
from review_dashboard.models.review import Review
from review_dashboard.models.user import User

__all__ = ['Product', 'Review', 'User', 'CATEGORIES']
