"""
CatalogService handles business logic for the product catalog.

Listing (optionally filtered by category or price range), point lookup,
creation with (name, category) uniqueness, and the starter-catalog seed.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from review_dashboard.models.product import Product
from review_dashboard.schemas import load_or_raise
from review_dashboard.schemas.product_schema import ProductCreateSchema
from review_dashboard.utils.errors import ConflictError, NotFoundError, ValidationError
from review_dashboard.utils.price_ranges import PRICE_RANGES, bounds_for, classify, is_price_range

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {'name': 'iPhone 14 Pro', 'category': 'Electronics', 'price': Decimal('999.99')},
    {'name': 'Samsung Galaxy Buds', 'category': 'Electronics', 'price': Decimal('149.99')},
    {'name': 'Bluetooth Speaker', 'category': 'Electronics', 'price': Decimal('29.99')},
    {'name': 'Nike Air Force 1', 'category': 'Clothing', 'price': Decimal('89.99')},
    {'name': "Levi's 501 Jeans", 'category': 'Clothing', 'price': Decimal('69.99')},
    {'name': 'Basic T-Shirt', 'category': 'Clothing', 'price': Decimal('12.99')},
    {'name': 'Dyson V11 Vacuum', 'category': 'Home & Garden', 'price': Decimal('399.99')},
    {'name': 'Coffee Machine', 'category': 'Home & Garden', 'price': Decimal('179.99')},
    {'name': 'Plant Pot Set', 'category': 'Home & Garden', 'price': Decimal('15.99')},
    {'name': 'Wilson Tennis Racket', 'category': 'Sports', 'price': Decimal('129.99')},
    {'name': 'Football', 'category': 'Sports', 'price': Decimal('24.99')},
    {'name': 'Yoga Mat', 'category': 'Sports', 'price': Decimal('34.99')},
    {'name': 'MAC Lipstick', 'category': 'Beauty', 'price': Decimal('22.50')},
    {'name': 'Skincare Set', 'category': 'Beauty', 'price': Decimal('79.99')},
    {'name': 'Face Mask', 'category': 'Beauty', 'price': Decimal('8.99')},
    {'name': 'Organic Honey', 'category': 'Food & Drink', 'price': Decimal('16.50')},
    {'name': 'Premium Wine', 'category': 'Food & Drink', 'price': Decimal('45.00')},
    {'name': 'Artisan Chocolate Box', 'category': 'Food & Drink', 'price': Decimal('28.99')},
]


class CatalogService:
    """Service for product catalog operations."""

    def __init__(self, session: Session):
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

    def list_products(self, category: Optional[str] = None, price_range: Optional[str] = None) -> List[Product]:
        """
        List products, optionally filtered.

        Without filters the order is category then name. A category filter
        orders by name; a price-range filter orders by price (then name).

        Raises:
            ValidationError: If ``price_range`` is not one of the known labels.
        """
        stmt = select(Product)
        if category is not None:
            stmt = stmt.where(Product.category == category)
        if price_range is not None:
            if not is_price_range(price_range):
                raise ValidationError('Invalid price range', details=[
                    {'field': 'range', 'message': f"Must be one of: {', '.join(PRICE_RANGES)}."}
                ])
            lower, upper = bounds_for(price_range)
            if lower is not None:
                stmt = stmt.where(Product.price >= lower)
            if upper is not None:
                stmt = stmt.where(Product.price < upper)
            stmt = stmt.order_by(Product.price.asc(), Product.name.asc())
        elif category is not None:
            stmt = stmt.order_by(Product.name.asc())
        else:
            stmt = stmt.order_by(Product.category.asc(), Product.name.asc())
        return list(self.session.scalars(stmt).all())

    def get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError('Product not found')
        return product

    def create_product(self, data: Optional[Dict[str, Any]]) -> Product:
        """
        Validate and insert a product.

        Raises:
            ValidationError: If a field violates its constraints.
            ConflictError: If a product with the same name and category exists.
        """
        payload = load_or_raise(ProductCreateSchema(), data)
        existing = self.session.scalar(
            select(Product.id).where(
                Product.name == payload['name'],
                Product.category == payload['category'],
            )
        )
        if existing is not None:
            raise ConflictError('Product already exists in this category')

        product = Product(name=payload['name'], category=payload['category'], price=payload['price'])
        self.session.add(product)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError('Product already exists in this category')
        logger.info(f"Product created: id={product.id} name='{product.name}' category='{product.category}'")
        return product

    def seed_products(self) -> int:
        """
        Insert the starter catalog when the products table is empty.

        Returns:
            Number of products inserted (0 when products already exist).
        """
        if self.session.scalar(select(Product.id).limit(1)) is not None:
            logger.info("Products already exist, skipping seeding")
            return 0

        self.session.add_all(Product(**item) for item in SEED_PRODUCTS)
        self.session.commit()
        logger.info(f"Seeded {len(SEED_PRODUCTS)} products")

        by_category: Dict[str, List[Decimal]] = defaultdict(list)
        by_range: Dict[str, int] = {label: 0 for label in PRICE_RANGES}
        for item in SEED_PRODUCTS:
            by_category[item['category']].append(item['price'])
            by_range[classify(item['price'])] += 1
        for category, prices in by_category.items():
            avg_price = sum(prices) / len(prices)
            logger.info(f"  {category}: {len(prices)} products (avg: £{avg_price:.2f})")
        for label, count in by_range.items():
            logger.info(f"  {label}: {count} products")
        return len(SEED_PRODUCTS)
