"""
AnalyticsService computes the store analytics snapshot.

Every call re-reads the current rows: there is no cache and no incremental
state. The sub-queries are independent reads (no shared transaction), so a
review written between two of them may show up in one figure and not in
another.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from review_dashboard.models.product import Product
from review_dashboard.models.review import ATTENTION_THRESHOLD, Review
from review_dashboard.schemas.review_schema import RecentReviewSchema
from review_dashboard.utils.errors import AnalyticsError
from review_dashboard.utils.price_ranges import PRICE_RANGES, price_range_case

logger = logging.getLogger(__name__)

NO_CATEGORY = 'N/A'


def rating_label(rating: int) -> str:
    return f"{rating} Star" if rating == 1 else f"{rating} Stars"


def _round(value: Any) -> float:
    return round(float(value), 2)


@dataclass
class CategoryRating:
    category: str
    avg_rating: float
    review_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {'category': self.category, 'avgRating': self.avg_rating, 'reviewCount': self.review_count}


@dataclass
class ProductAttention:
    product_id: int
    avg_rating: float
    review_count: int
    name: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'productId': self.product_id,
            'avgRating': self.avg_rating,
            'reviewCount': self.review_count,
            'product': {'name': self.name, 'category': self.category},
        }


@dataclass
class AnalyticsSnapshot:
    total_reviews: int = 0
    avg_rating: float = 0
    best_category: str = NO_CATEGORY
    most_reviewed_price_range: str = PRICE_RANGES[0]
    category_ratings: List[CategoryRating] = field(default_factory=list)
    rating_distribution: Dict[str, int] = field(default_factory=dict)
    price_range_distribution: Dict[str, int] = field(default_factory=lambda: {label: 0 for label in PRICE_RANGES})
    products_needing_attention: List[ProductAttention] = field(default_factory=list)
    recent_reviews: List[Review] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'storeInsights': {
                'totalReviews': self.total_reviews,
                'avgRating': self.avg_rating,
                'bestCategory': self.best_category,
                'mostReviewedPriceRange': self.most_reviewed_price_range,
            },
            'categoryRatings': [c.to_dict() for c in self.category_ratings],
            'ratingDistribution': dict(self.rating_distribution),
            'priceRangeDistribution': dict(self.price_range_distribution),
            'productsNeedingAttention': [p.to_dict() for p in self.products_needing_attention],
            'recentReviews': RecentReviewSchema(many=True).dump(self.recent_reviews),
        }


class AnalyticsService:
    """Service that aggregates reviews into store-level analytics."""

    def __init__(self, session: Session, attention_threshold: float = ATTENTION_THRESHOLD,
                 recent_limit: int = 5):
        """
        Args:
            session: SQLAlchemy session for database operations.
            attention_threshold: products whose average rating is strictly
                below this value are flagged.
            recent_limit: number of reviews in ``recent_reviews``.
        """
        self.session = session
        self.attention_threshold = attention_threshold
        self.recent_limit = recent_limit

    def compute_analytics(self) -> AnalyticsSnapshot:
        """
        Compute the full snapshot from current storage state.

        Raises:
            AnalyticsError: If any sub-query fails; no partial snapshot is returned.
        """
        try:
            total_reviews = self.session.scalar(select(func.count(Review.id))) or 0
            avg_rating = self.session.scalar(select(func.avg(Review.rating)))
            category_ratings = self._category_ratings()
            price_distribution = self._price_range_distribution()
            snapshot = AnalyticsSnapshot(
                total_reviews=total_reviews,
                avg_rating=_round(avg_rating) if avg_rating is not None else 0,
                best_category=category_ratings[0].category if category_ratings else NO_CATEGORY,
                most_reviewed_price_range=self._most_reviewed(price_distribution),
                category_ratings=category_ratings,
                rating_distribution=self._rating_distribution(),
                price_range_distribution=price_distribution,
                products_needing_attention=self._products_needing_attention(),
                recent_reviews=self._recent_reviews(),
            )
        except SQLAlchemyError as e:
            logger.error(f"Error computing analytics: {e}", exc_info=True)
            raise AnalyticsError() from e

        logger.debug(f"Analytics computed: total_reviews={snapshot.total_reviews} avg={snapshot.avg_rating}")
        return snapshot

    def _category_ratings(self) -> List[CategoryRating]:
        avg_expr = func.avg(Review.rating)
        rows = self.session.execute(
            select(
                Review.category,
                avg_expr.label('avg_rating'),
                func.count(Review.id).label('review_count'),
            )
            .group_by(Review.category)
            # empate na média: ordem alfabética da categoria
            .order_by(avg_expr.desc(), Review.category.asc())
        ).all()
        return [CategoryRating(row.category, _round(row.avg_rating), int(row.review_count)) for row in rows]

    def _rating_distribution(self) -> Dict[str, int]:
        rows = self.session.execute(
            select(Review.rating, func.count(Review.id).label('count'))
            .group_by(Review.rating)
            .order_by(Review.rating.asc())
        ).all()
        return {rating_label(row.rating): int(row.count) for row in rows if row.count}

    def _price_range_distribution(self) -> Dict[str, int]:
        # CASE calculado numa subquery para que o GROUP BY use a coluna e não
        # repita a expressão com parâmetros próprios (PostgreSQL rejeita).
        bucketed = (
            select(Review.id.label('review_id'), price_range_case(Product.price).label('price_range'))
            .join(Product, Review.product_id == Product.id)
            .subquery()
        )
        rows = self.session.execute(
            select(bucketed.c.price_range, func.count(bucketed.c.review_id).label('review_count'))
            .group_by(bucketed.c.price_range)
        ).all()

        distribution = {label: 0 for label in PRICE_RANGES}
        for row in rows:
            if row.price_range in distribution:
                distribution[row.price_range] = int(row.review_count)
        return distribution

    @staticmethod
    def _most_reviewed(distribution: Dict[str, int]) -> str:
        best_label, best_count = PRICE_RANGES[0], distribution.get(PRICE_RANGES[0], 0)
        for label in PRICE_RANGES[1:]:
            if distribution.get(label, 0) > best_count:
                best_label, best_count = label, distribution[label]
        return best_label

    def _products_needing_attention(self) -> List[ProductAttention]:
        avg_expr = func.avg(Review.rating)
        rows = self.session.execute(
            select(
                Review.product_id,
                avg_expr.label('avg_rating'),
                func.count(Review.id).label('review_count'),
                Product.name,
                Product.category,
            )
            .join(Product, Review.product_id == Product.id)
            .group_by(Review.product_id, Product.name, Product.category)
            .having(avg_expr < self.attention_threshold)
            .order_by(avg_expr.asc(), Review.product_id.asc())
        ).all()
        return [
            ProductAttention(
                product_id=row.product_id,
                avg_rating=_round(row.avg_rating),
                review_count=int(row.review_count),
                name=row.name,
                category=row.category,
            )
            for row in rows
        ]

    def _recent_reviews(self) -> List[Review]:
        stmt = (
            select(Review)
            .options(joinedload(Review.product))
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(self.recent_limit)
        )
        return list(self.session.scalars(stmt).all())


def compute_analytics(session: Session, config: Optional[Dict[str, Any]] = None) -> AnalyticsSnapshot:
    """Builds an AnalyticsService from app config values and computes a snapshot."""
    config = config or {}
    service = AnalyticsService(
        session,
        attention_threshold=config.get('ATTENTION_RATING_THRESHOLD', ATTENTION_THRESHOLD),
        recent_limit=config.get('RECENT_REVIEWS_LIMIT', 5),
    )
    return service.compute_analytics()
