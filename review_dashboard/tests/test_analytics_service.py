from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from review_dashboard.extensions import db
from review_dashboard.services.analytics_service import AnalyticsService, compute_analytics, rating_label
from review_dashboard.utils.errors import AnalyticsError
from review_dashboard.utils.price_ranges import PRICE_RANGES

pytestmark = pytest.mark.usefixtures('ctx')


def _snapshot(**kwargs):
    return AnalyticsService(db.session, **kwargs).compute_analytics()


def test_empty_store():
    data = _snapshot().to_dict()
    assert data['storeInsights'] == {
        'totalReviews': 0,
        'avgRating': 0,
        'bestCategory': 'N/A',
        'mostReviewedPriceRange': 'Under £20',
    }
    assert data['categoryRatings'] == []
    assert data['ratingDistribution'] == {}
    assert data['priceRangeDistribution'] == {label: 0 for label in PRICE_RANGES}
    assert data['productsNeedingAttention'] == []
    assert data['recentReviews'] == []


def test_two_reviews_average(make_product, make_review):
    product = make_product(price='30')
    make_review(product, 5)
    make_review(product, 1)

    snapshot = _snapshot()
    assert snapshot.total_reviews == 2
    assert snapshot.avg_rating == 3.0
    assert snapshot.rating_distribution == {'1 Star': 1, '5 Stars': 1}


def test_average_is_rounded_to_two_places(make_product, make_review):
    product = make_product()
    for rating in (5, 4, 4):
        make_review(product, rating)
    assert _snapshot().avg_rating == 4.33


def test_rating_labels():
    assert rating_label(1) == '1 Star'
    assert rating_label(2) == '2 Stars'


class TestCategories:

    def test_best_category_is_highest_average(self, make_product, make_review):
        make_review(make_product(category='Sports'), 3)
        beauty = make_product(category='Beauty')
        make_review(beauty, 5)
        make_review(beauty, 4)

        snapshot = _snapshot()
        assert snapshot.best_category == 'Beauty'
        assert [c.to_dict() for c in snapshot.category_ratings] == [
            {'category': 'Beauty', 'avgRating': 4.5, 'reviewCount': 2},
            {'category': 'Sports', 'avgRating': 3.0, 'reviewCount': 1},
        ]

    def test_category_average_spans_products(self, make_product, make_review):
        make_review(make_product(category='Home & Garden'), 5)
        make_review(make_product(category='Home & Garden'), 1)

        snapshot = _snapshot()
        assert [c.to_dict() for c in snapshot.category_ratings] == [
            {'category': 'Home & Garden', 'avgRating': 3.0, 'reviewCount': 2},
        ]
        assert snapshot.to_dict()['categoryRatings'] == [
            {'category': 'Home & Garden', 'avgRating': 3.0, 'reviewCount': 2},
        ]

    def test_tie_broken_by_category_name(self, make_product, make_review):
        make_review(make_product(category='Sports'), 4)
        make_review(make_product(category='Electronics'), 4)
        make_review(make_product(category='Beauty'), 2)

        snapshot = _snapshot()
        assert snapshot.best_category == 'Electronics'
        assert [c.category for c in snapshot.category_ratings] == ['Electronics', 'Sports', 'Beauty']

    def test_groups_by_review_category_snapshot(self, make_product, make_review):
        product = make_product(category='Sports')
        make_review(product, 5, category='Clothing')
        assert _snapshot().best_category == 'Clothing'


class TestPriceRanges:

    def test_distribution_has_every_label(self, make_product, make_review):
        make_review(make_product(price='19.99'), 4)
        make_review(make_product(price='20.00'), 4)
        make_review(make_product(price='20.00'), 2)
        make_review(make_product(price='250'), 5)

        snapshot = _snapshot()
        assert snapshot.price_range_distribution == {
            'Under £20': 1,
            '£20-£50': 2,
            '£50-£100': 0,
            '£100-£200': 0,
            'Over £200': 1,
        }
        assert snapshot.most_reviewed_price_range == '£20-£50'

    def test_tie_keeps_first_label_in_order(self, make_product, make_review):
        make_review(make_product(price='150'), 4)
        make_review(make_product(price='60'), 4)
        assert _snapshot().most_reviewed_price_range == '£50-£100'


class TestProductsNeedingAttention:

    def test_threshold_is_strict(self, make_product, make_review):
        poor = make_product(name='Poor Product')
        make_review(poor, 1)
        make_review(poor, 2)
        fine = make_product(name='Fine Product')
        make_review(fine, 3)
        make_review(fine, 4)
        borderline = make_product(name='Borderline Product')
        make_review(borderline, 3)

        items = [p.to_dict() for p in _snapshot().products_needing_attention]
        assert items == [{
            'productId': poor.id,
            'avgRating': 1.5,
            'reviewCount': 2,
            'product': {'name': 'Poor Product', 'category': poor.category},
        }]

    def test_ordered_by_average_then_product_id(self, make_product, make_review):
        first = make_product()
        second = make_product()
        third = make_product()
        make_review(third, 1)
        make_review(second, 2)
        make_review(first, 2)

        ids = [p.product_id for p in _snapshot().products_needing_attention]
        assert ids == [third.id, first.id, second.id]

    def test_configurable_threshold(self, make_product, make_review):
        product = make_product()
        make_review(product, 4)
        assert _snapshot(attention_threshold=4.5).products_needing_attention[0].product_id == product.id


class TestRecentReviews:

    def test_latest_first_with_limit(self, make_product, make_review, base_time):
        product = make_product()
        created = [make_review(product, 4, created_at=base_time + timedelta(minutes=i)) for i in range(7)]

        recent = _snapshot().to_dict()['recentReviews']
        assert [r['id'] for r in recent] == [r.id for r in reversed(created)][:5]
        assert recent[0]['product'] == {'name': product.name, 'category': product.category}

    def test_same_timestamp_broken_by_id(self, make_product, make_review, base_time):
        product = make_product()
        first = make_review(product, 4, created_at=base_time)
        second = make_review(product, 4, created_at=base_time)

        recent = _snapshot(recent_limit=2).recent_reviews
        assert [r.id for r in recent] == [second.id, first.id]


def test_storage_failure_becomes_analytics_error():
    service = AnalyticsService(db.session)
    with patch.object(service, '_category_ratings', side_effect=OperationalError('SELECT', {}, Exception('boom'))):
        with pytest.raises(AnalyticsError) as exc:
            service.compute_analytics()
    assert exc.value.message == 'Failed to get analytics'
    assert exc.value.status_code == 500


def test_compute_analytics_reads_config(make_product, make_review):
    product = make_product()
    make_review(product, 4)
    snapshot = compute_analytics(db.session, {'ATTENTION_RATING_THRESHOLD': 5, 'RECENT_REVIEWS_LIMIT': 1})
    assert len(snapshot.products_needing_attention) == 1
    assert len(snapshot.recent_reviews) == 1
