# client/dashboard.py

"""
Monta o estado do dashboard a partir da API.

Cada widget (cards, gráficos, lista de atenção, tabela, produtos) carrega de
forma independente: a falha de uma chamada vira ``WidgetState.error`` só
naquele widget e os demais continuam com dados.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from review_dashboard.client.api_client import ApiClient, ClientApiError
from review_dashboard.models.review import COMMENT_MAX_LENGTH, RATING_MAX, RATING_MIN
from review_dashboard.utils.price_ranges import PRICE_RANGES

logger = logging.getLogger(__name__)

RATING_LABELS = [f"{n} Star" if n == 1 else f"{n} Stars" for n in range(RATING_MIN, RATING_MAX + 1)]
RATING_FILTERS = ['1-2', '3', '4-5']
SORT_FIELDS = ['createdAt', 'updatedAt', 'rating', 'category', 'id']


@dataclass
class WidgetState:
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DashboardView:
    cards: WidgetState = field(default_factory=WidgetState)
    charts: WidgetState = field(default_factory=WidgetState)
    attention: WidgetState = field(default_factory=WidgetState)
    table: WidgetState = field(default_factory=WidgetState)
    products: WidgetState = field(default_factory=WidgetState)


def _to_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass
class ReviewFilters:
    """Filtros da tabela de reviews, convertidos em query params da API."""

    category: Optional[str] = None
    rating: Optional[str] = None
    page: int = 1
    limit: int = 10
    sort_by: str = 'createdAt'
    sort_order: str = 'DESC'

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> 'ReviewFilters':
        sort_by = args.get('sortBy') or 'createdAt'
        sort_order = str(args.get('sortOrder') or 'DESC').upper()
        rating = args.get('rating') or None
        return cls(
            category=args.get('category') or None,
            rating=rating if rating in RATING_FILTERS else None,
            page=_to_int(args.get('page'), 1),
            limit=_to_int(args.get('limit'), 10),
            sort_by=sort_by if sort_by in SORT_FIELDS else 'createdAt',
            sort_order=sort_order if sort_order in ('ASC', 'DESC') else 'DESC',
        )

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            'page': self.page,
            'limit': self.limit,
            'sortBy': self.sort_by,
            'sortOrder': self.sort_order,
        }
        if self.category:
            params['category'] = self.category
        if self.rating:
            params['rating'] = self.rating
        return params

    def with_page(self, page: int) -> Dict[str, Any]:
        params = self.to_params()
        params['page'] = page
        return params


def rating_series(distribution: Mapping[str, int]) -> Dict[str, List[Any]]:
    """Série 1..5 estrelas; rótulos ausentes na resposta entram com 0."""
    return {'labels': list(RATING_LABELS), 'values': [int(distribution.get(label, 0)) for label in RATING_LABELS]}


def price_range_series(distribution: Mapping[str, int]) -> Dict[str, List[Any]]:
    return {'labels': list(PRICE_RANGES), 'values': [int(distribution.get(label, 0)) for label in PRICE_RANGES]}


def category_series(category_ratings: List[Mapping[str, Any]]) -> Dict[str, List[Any]]:
    return {
        'labels': [c['category'] for c in category_ratings],
        'values': [c['avgRating'] for c in category_ratings],
        'counts': [c['reviewCount'] for c in category_ratings],
    }


class DashboardLoader:
    """Carrega todos os widgets do dashboard usando um ApiClient autenticado."""

    def __init__(self, api: ApiClient):
        self.api = api

    def _fetch(self, name: str, call: Callable[[], Any]) -> WidgetState:
        try:
            return WidgetState(data=call())
        except ClientApiError as e:
            logger.warning(f"Dashboard widget '{name}' failed: {e.message} (status={e.status})")
            return WidgetState(error=e.message)

    def load(self, filters: Optional[ReviewFilters] = None) -> DashboardView:
        filters = filters or ReviewFilters()
        view = DashboardView()

        analytics = self._fetch('analytics', self.api.get_analytics)
        if analytics.ok:
            data = analytics.data
            view.cards = WidgetState(data=data['storeInsights'])
            view.charts = WidgetState(data={
                'ratings': rating_series(data.get('ratingDistribution') or {}),
                'priceRanges': price_range_series(data.get('priceRangeDistribution') or {}),
                'categories': category_series(data.get('categoryRatings') or []),
            })
            view.attention = WidgetState(data={
                'products': data.get('productsNeedingAttention') or [],
                'recentReviews': data.get('recentReviews') or [],
            })
        else:
            view.cards = view.charts = view.attention = WidgetState(error=analytics.error)

        view.products = self._fetch('products', self.api.get_products)
        view.table = self._fetch('reviews', lambda: self.api.get_reviews(filters.to_params()))
        return view


def submit_review(api: ApiClient, product_id: Any, rating: Any, comment: Optional[str] = None) -> Dict[str, Any]:
    """
    Valida localmente e envia uma review.

    Raises:
        ClientApiError: status 400 para falhas locais; senão o erro da API.
    """
    details = []
    try:
        product_id = int(product_id)
    except (TypeError, ValueError):
        details.append({'field': 'productId', 'message': 'Product is required.'})
    try:
        rating = int(rating)
        if not RATING_MIN <= rating <= RATING_MAX:
            raise ValueError(rating)
    except (TypeError, ValueError):
        details.append({'field': 'rating', 'message': f"Rating must be between {RATING_MIN} and {RATING_MAX}."})
    comment = (comment or '').strip() or None
    if comment and len(comment) > COMMENT_MAX_LENGTH:
        details.append({'field': 'comment', 'message': f"Comment must be at most {COMMENT_MAX_LENGTH} characters."})
    if details:
        raise ClientApiError('Validation failed', status=400, details=details)
    return api.create_review(product_id, rating, comment)
