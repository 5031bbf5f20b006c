from decimal import Decimal

import pytest
from sqlalchemy import literal, select

from review_dashboard.utils.price_ranges import (
    PRICE_RANGES, bounds_for, classify, format_price, is_price_range, price_range_case,
)


@pytest.mark.parametrize('price, label', [
    (Decimal('0.01'), 'Under £20'),
    (Decimal('19.99'), 'Under £20'),
    (Decimal('20.00'), '£20-£50'),
    (Decimal('49.99'), '£20-£50'),
    (Decimal('50.00'), '£50-£100'),
    (Decimal('99.99'), '£50-£100'),
    (Decimal('100.00'), '£100-£200'),
    (Decimal('199.99'), '£100-£200'),
    (Decimal('200.00'), 'Over £200'),
    (Decimal('999.99'), 'Over £200'),
])
def test_classify_boundaries(price, label):
    assert classify(price) == label


def test_classify_accepts_floats_without_binary_artifacts():
    assert classify(19.99) == 'Under £20'
    assert classify(20) == '£20-£50'
    assert classify('200') == 'Over £200'


def test_classify_rejects_garbage():
    with pytest.raises(ValueError):
        classify('abc')


def test_labels_are_in_fixed_order():
    assert PRICE_RANGES == ['Under £20', '£20-£50', '£50-£100', '£100-£200', 'Over £200']


def test_bounds_are_half_open_and_match_classifier():
    for label in PRICE_RANGES:
        lower, upper = bounds_for(label)
        if lower is not None:
            assert classify(lower) == label
        if upper is not None:
            assert classify(upper) != label
            assert classify(upper - Decimal('0.01')) == label


def test_bounds_for_unknown_label():
    assert not is_price_range('£1-£2')
    with pytest.raises(KeyError):
        bounds_for('£1-£2')


def test_format_price():
    assert format_price(Decimal('9.5')) == '£9.50'
    assert format_price(999.99) == '£999.99'


def test_sql_case_matches_python_classifier(ctx):
    from review_dashboard.extensions import db

    for price in ('19.99', '20.00', '50.00', '199.99', '200.00'):
        stmt = select(price_range_case(literal(Decimal(price))))
        assert db.session.scalar(stmt) == classify(Decimal(price))
