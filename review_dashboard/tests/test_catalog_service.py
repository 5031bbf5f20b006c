from decimal import Decimal

import pytest
from sqlalchemy import func, select

from review_dashboard.extensions import db
from review_dashboard.models import CATEGORIES, Product
from review_dashboard.services.catalog_service import SEED_PRODUCTS, CatalogService
from review_dashboard.utils.errors import ConflictError, NotFoundError, ValidationError

pytestmark = pytest.mark.usefixtures('ctx')


def _names(products):
    return [p.name for p in products]


class TestListProducts:

    def test_unfiltered_orders_by_category_then_name(self, make_product):
        make_product(name='Zebra Lamp', category='Home & Garden', price='30')
        make_product(name='Apple Watch', category='Electronics', price='300')
        make_product(name='Aloe Cream', category='Beauty', price='10')
        make_product(name='Bluetooth Speaker', category='Electronics', price='29.99')

        products = CatalogService(db.session).list_products()
        assert _names(products) == ['Aloe Cream', 'Apple Watch', 'Bluetooth Speaker', 'Zebra Lamp']

    def test_category_filter_orders_by_name(self, make_product):
        make_product(name='Yoga Mat', category='Sports', price='34.99')
        make_product(name='Football', category='Sports', price='24.99')
        make_product(name='Face Mask', category='Beauty', price='8.99')

        products = CatalogService(db.session).list_products(category='Sports')
        assert _names(products) == ['Football', 'Yoga Mat']

    def test_unknown_category_returns_empty_list(self, make_product):
        make_product(category='Sports')
        assert CatalogService(db.session).list_products(category='Toys') == []

    def test_price_range_filter_uses_half_open_bounds(self, make_product):
        make_product(name='Cheap Thing', price='19.99')
        make_product(name='Boundary Twenty', price='20.00')
        make_product(name='Almost Fifty', price='49.99')
        make_product(name='Boundary Fifty', price='50.00')

        products = CatalogService(db.session).list_products(price_range='£20-£50')
        assert _names(products) == ['Boundary Twenty', 'Almost Fifty']

    def test_open_ended_ranges(self, make_product):
        make_product(name='Budget Item', price='5')
        make_product(name='Luxury Item', price='200')

        service = CatalogService(db.session)
        assert _names(service.list_products(price_range='Under £20')) == ['Budget Item']
        assert _names(service.list_products(price_range='Over £200')) == ['Luxury Item']

    def test_invalid_price_range(self):
        with pytest.raises(ValidationError) as exc:
            CatalogService(db.session).list_products(price_range='£1-£2')
        assert exc.value.message == 'Invalid price range'


class TestCreateProduct:

    def test_creates_product(self):
        product = CatalogService(db.session).create_product(
            {'name': '  Standing Desk ', 'category': 'Home & Garden', 'price': 249.5}
        )
        assert product.id is not None
        assert product.name == 'Standing Desk'
        assert product.price == Decimal('249.50')
        assert product.price_range == 'Over £200'
        assert product.formatted_price == '£249.50'

    @pytest.mark.parametrize('payload, field', [
        ({'name': 'Tiny', 'category': 'Sports', 'price': 10}, 'name'),
        ({'name': 'x' * 101, 'category': 'Sports', 'price': 10}, 'name'),
        ({'name': 'Valid Name', 'category': 'Toys', 'price': 10}, 'category'),
        ({'name': 'Valid Name', 'category': 'Sports', 'price': 0}, 'price'),
        ({'name': 'Valid Name', 'category': 'Sports', 'price': 100000}, 'price'),
        ({'name': 'Valid Name', 'category': 'Sports'}, 'price'),
    ])
    def test_validation(self, payload, field):
        with pytest.raises(ValidationError) as exc:
            CatalogService(db.session).create_product(payload)
        assert field in [d['field'] for d in exc.value.details]
        assert db.session.scalar(select(func.count(Product.id))) == 0

    def test_duplicate_name_in_same_category(self, make_product):
        make_product(name='Yoga Mat', category='Sports')
        with pytest.raises(ConflictError):
            CatalogService(db.session).create_product({'name': 'Yoga Mat', 'category': 'Sports', 'price': 20})

    def test_same_name_in_other_category_is_allowed(self, make_product):
        make_product(name='Gift Set', category='Beauty')
        product = CatalogService(db.session).create_product({'name': 'Gift Set', 'category': 'Food & Drink', 'price': 20})
        assert product.category == 'Food & Drink'


def test_get_product_not_found():
    with pytest.raises(NotFoundError):
        CatalogService(db.session).get_product(999999)


class TestSeedProducts:

    def test_seeds_starter_catalog_once(self):
        service = CatalogService(db.session)
        assert service.seed_products() == len(SEED_PRODUCTS) == 18
        assert service.seed_products() == 0
        assert db.session.scalar(select(func.count(Product.id))) == 18

    def test_three_products_per_category(self):
        per_category = {}
        for item in SEED_PRODUCTS:
            per_category[item['category']] = per_category.get(item['category'], 0) + 1
        assert set(per_category) == set(CATEGORIES)
        assert set(per_category.values()) == {3}

    def test_skips_when_products_exist(self, make_product):
        make_product()
        assert CatalogService(db.session).seed_products() == 0
