"""
ReviewService handles review creation, lookup and the paginated listing.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from review_dashboard.models.product import Product
from review_dashboard.models.review import Review
from review_dashboard.schemas import load_or_raise
from review_dashboard.schemas.review_schema import (
    RATING_BUCKETS, SORTABLE_FIELDS, ReviewCreateSchema, ReviewQuerySchema,
)
from review_dashboard.utils.errors import NotFoundError
from review_dashboard.utils.pagination import clamp_per_page, paginate_select, pagination_info

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for review operations."""

    def __init__(self, session: Session):
        self.session = session

    def create_review(self, data: Optional[Dict[str, Any]]) -> Review:
        """
        Validate and insert a review for an existing product.

        The product's category is copied onto the review once, here, and is
        never refreshed afterwards.

        Raises:
            ValidationError: Missing product id/rating, rating outside 1..5,
                or comment longer than 300 characters.
            NotFoundError: If the product does not exist (no row is written).
        """
        payload = load_or_raise(ReviewCreateSchema(), data)

        product = self.session.get(Product, payload['product_id'])
        if product is None:
            raise NotFoundError('Product not found')

        review = Review(
            product_id=product.id,
            category=product.category,
            rating=payload['rating'],
            comment=payload.get('comment') or None,
        )
        self.session.add(review)
        self.session.commit()
        logger.info(f"Review created: id={review.id} product_id={product.id} rating={review.rating}")
        return self.get_review(review.id)

    def get_review(self, review_id: int) -> Review:
        review = self.session.scalar(
            select(Review).options(joinedload(Review.product)).where(Review.id == review_id)
        )
        if review is None:
            raise NotFoundError('Review not found')
        return review

    def list_reviews(self, params: Optional[Dict[str, Any]] = None) -> Tuple[List[Review], Dict[str, Any]]:
        """
        List reviews with filters, sorting and pagination.

        Args:
            params: Query parameters (page, limit, category, rating,
                sortBy, sortOrder) as received from the query string.

        Returns:
            Tuple of (reviews with product loaded, PaginationInfo dict).
        """
        query = load_or_raise(ReviewQuerySchema(), params or {}, message='Invalid query parameters')
        per_page = clamp_per_page(query['limit'])

        stmt = select(Review).options(joinedload(Review.product))
        if query['category']:
            stmt = stmt.where(Review.category == query['category'])
        if query['rating']:
            low, high = RATING_BUCKETS[query['rating']]
            stmt = stmt.where(Review.rating.between(low, high))

        column = getattr(Review, SORTABLE_FIELDS[query['sort_by']])
        if query['sort_order'] == 'ASC':
            stmt = stmt.order_by(column.asc(), Review.id.asc())
        else:
            stmt = stmt.order_by(column.desc(), Review.id.desc())

        pagination = paginate_select(stmt, page=query['page'], per_page=per_page)
        return list(pagination.items), pagination_info(pagination)
